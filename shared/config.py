"""
KeyLength Configuration Management
===================================

Centralized configuration for the KeyLength toolkit using Python
dataclasses and TOML-based persistence.

Architecture follows the Twelve-Factor App methodology for configuration
management (Wiggins, 2011), separating config from code.

Example ``config.toml``::

    [global]
    log_level = "DEBUG"

    [keycheck]
    standard = "BSI"
    ports = "443,8443"
    timeout = "3s"

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class KeyCheckConfig:
    """Configuration for KeyCheck -- Key Length Classifier.

    Defaults for the standards catalog, the TLS scan targets and the
    certificate expiry window. Every value can be overridden per
    invocation from the command line.

    Reference:
        NIST SP 800-57 Part 1 Rev. 5 (2020). Recommendation for Key
        Management.
    """

    # Standards catalog; empty selects the bundled standards.json
    standards_file: str = ""
    standard: str = "NIST"

    # TLS scan parameters
    ports: str = "443"
    timeout: str = "5s"
    check_expiry: bool = False
    expiry_warning_days: int = 90

    output_format: str = "console"


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity, log destination and version."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class KeyLengthConfig:
    """Master configuration aggregating tool-specific and global settings.

    Usage:
        >>> config = KeyLengthConfig.load()                # from default path
        >>> config = KeyLengthConfig.load("custom.toml")   # from custom path
        >>> print(config.keycheck.standard)
        'NIST'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    keycheck: KeyCheckConfig = field(default_factory=KeyCheckConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> KeyLengthConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root. Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`KeyLengthConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            keycheck=cls._build_section(KeyCheckConfig, raw.get("keycheck", {})),
        )

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)

