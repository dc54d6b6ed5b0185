"""
Standards Catalog
==================

Loads the named security standards (NIST, BSI, ...) from a JSON file and
answers threshold queries for the selected standard.

File shape::

    {
      "standards": {
        "NIST": {"RSA": 2048, "ECC": 256, "Symmetric": 128, "cut_off_year": 2030}
      }
    }

Year policy: once the evaluation year is past a standard's cutoff year the
configured RSA minimum is replaced by 3072 bits, so an ageing standard
cannot under-threshold current traffic. ECC and symmetric minimums are
always read as configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from keycheck.core.errors import (
    EmptySourcePathError,
    MalformedSourceError,
    UnknownStandardError,
    UnreadableSourceError,
)
from keycheck.core.models import Standard, StandardsFile

DEFAULT_STANDARD: str = "NIST"

# RSA minimum applied once a standard's cutoff year has passed
RSA_CUTOFF_THRESHOLD: int = 3072

DEFAULT_STANDARDS_PATH: Path = (
    Path(__file__).resolve().parent.parent / "data" / "standards.json"
)


def _current_year() -> int:
    return datetime.now(timezone.utc).year


@dataclass(frozen=True, slots=True)
class SelectedStandard:
    """The standard chosen for an evaluation run.

    Attributes:
        name: Catalog key of the standard.
        standard: The standard's minimum key lengths.
        as_of_year: Year used for the cutoff check when a query does not
            pass one explicitly. ``None`` means the current calendar year.
    """

    name: str
    standard: Standard
    as_of_year: Optional[int] = None

    def effective_year(self, as_of_year: Optional[int] = None) -> int:
        if as_of_year is not None:
            return as_of_year
        if self.as_of_year is not None:
            return self.as_of_year
        return _current_year()

    def cutoff_passed(self, as_of_year: Optional[int] = None) -> bool:
        """Whether the evaluation year is strictly after the cutoff year."""
        cutoff = self.standard.cutoff_year
        if cutoff is None:
            return False
        return self.effective_year(as_of_year) > cutoff

    def get_threshold(self, algorithm: str, as_of_year: Optional[int] = None) -> int:
        """Minimum acceptable bit length for *algorithm*.

        Args:
            algorithm: "RSA", "ECC" or "Symmetric". Any other tag yields 0.
            as_of_year: Year for the cutoff check (see class docs).

        Returns:
            Threshold in bits.
        """
        if algorithm == "RSA":
            if self.cutoff_passed(as_of_year):
                return RSA_CUTOFF_THRESHOLD
            return self.standard.rsa_bits
        if algorithm == "ECC":
            return self.standard.ecc_bits
        if algorithm == "Symmetric":
            return self.standard.symmetric_bits
        return 0


class StandardsCatalog:
    """Read-only mapping of standard name to :class:`Standard`.

    Usage::

        catalog, selected = StandardsCatalog.load("standards.json", "BSI")
        selected.get_threshold("RSA")
        catalog.available_standards()
    """

    def __init__(self, standards: Mapping[str, Standard]) -> None:
        self._standards: dict[str, Standard] = dict(standards)

    @classmethod
    def load(
        cls,
        source: str | Path | None,
        selected_standard: str = "",
        *,
        as_of_year: Optional[int] = None,
    ) -> tuple[StandardsCatalog, SelectedStandard]:
        """Load a catalog from *source* and resolve the selected standard.

        Args:
            source: Path to the standards JSON file.
            selected_standard: Standard name; empty selects ``"NIST"``.
            as_of_year: Year bound to the returned selection.

        Returns:
            ``(catalog, selected)``.

        Raises:
            EmptySourcePathError: *source* is empty.
            UnreadableSourceError: The file cannot be read.
            MalformedSourceError: The content is not a standards table.
            UnknownStandardError: The selected name is not in the table.
        """
        catalog = cls.from_file(source)
        return catalog, catalog.select(selected_standard, as_of_year=as_of_year)

    @classmethod
    def from_file(cls, source: str | Path | None) -> StandardsCatalog:
        """Read and validate a standards file without selecting a standard."""
        if source is None or str(source) == "":
            raise EmptySourcePathError()

        path = Path(source)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise UnreadableSourceError(str(path), str(exc)) from exc

        return cls.from_json(raw, source_name=str(path))

    @classmethod
    def from_json(cls, raw: bytes | str, source_name: str = "<memory>") -> StandardsCatalog:
        """Build a catalog from JSON text, validating the table shape."""
        try:
            parsed = StandardsFile.model_validate_json(raw)
        except ValidationError as exc:
            raise MalformedSourceError(
                source_name, f"{exc.error_count()} validation error(s)"
            ) from exc

        if not parsed.standards:
            raise MalformedSourceError(source_name, "no standards defined")

        return cls(parsed.standards)

    def select(
        self, name: str = "", *, as_of_year: Optional[int] = None
    ) -> SelectedStandard:
        """Resolve *name* (empty -> ``"NIST"``) to a :class:`SelectedStandard`."""
        resolved = name or DEFAULT_STANDARD
        standard = self._standards.get(resolved)
        if standard is None:
            raise UnknownStandardError(resolved)
        return SelectedStandard(name=resolved, standard=standard, as_of_year=as_of_year)

    def available_standards(self) -> set[str]:
        """All standard names in the catalog."""
        return set(self._standards)

    def __getitem__(self, name: str) -> Standard:
        return self._standards[name]
