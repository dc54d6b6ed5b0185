"""
KeyCheck Report Generator
==========================

Machine-readable JSON reports for KeyCheck results, suitable for CI
pipelines and other tooling. Every report carries a small metadata block
followed by the serialised result model.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from keycheck import __tool_name__, __version__
from keycheck.core.models import EvaluationResult, ScanReport


class KeyCheckReportGenerator:
    """Builds and writes JSON reports.

    Usage::

        generator = KeyCheckReportGenerator()
        text = generator.render(scan_report)
        generator.generate_json(scan_report, Path("report.json"))
    """

    def build(
        self,
        result: Union[EvaluationResult, ScanReport],
        *,
        target: Optional[str] = None,
    ) -> dict[str, Any]:
        """Return the report document for *result* as a plain dictionary."""
        if isinstance(result, ScanReport):
            kind = "tls_scan"
            target = target or result.host
            payload = result.model_dump()
            payload["ports_scanned"] = result.ports_scanned
        else:
            kind = "key_evaluation"
            payload = result.model_dump()

        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": __tool_name__,
                "version": __version__,
                "kind": kind,
                "target": target,
            },
            "result": payload,
        }

    @staticmethod
    def dump_json(document: Any) -> str:
        return json.dumps(document, indent=2, ensure_ascii=False, default=str)

    def render(self, result: Union[EvaluationResult, ScanReport], **kwargs: Any) -> str:
        return self.dump_json(self.build(result, **kwargs))

    def generate_json(
        self,
        result: Union[EvaluationResult, ScanReport],
        output_path: Path,
        **kwargs: Any,
    ) -> Path:
        """Write the JSON report to *output_path* and return the path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(result, **kwargs), encoding="utf-8")
        return output_path
