"""
Engine settings.

Settings can be built in code or read from a YAML file:

    # engine.yaml
    engine:
      zero_evidence: raise      # "nan" (default) or "raise"
      validate_on_build: true
      tolerance: 1.0e-9
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml


class ZeroEvidencePolicy(Enum):
    NAN = "nan"
    RAISE = "raise"


@dataclass(frozen=True)
class EngineSettings:
    zero_evidence: ZeroEvidencePolicy = ZeroEvidencePolicy.NAN
    validate_on_build: bool = False
    tolerance: float = 1e-9

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineSettings":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown engine setting(s): {sorted(unknown)}")

        kwargs: Dict[str, Any] = dict(data)
        if "zero_evidence" in kwargs:
            try:
                kwargs["zero_evidence"] = ZeroEvidencePolicy(str(kwargs["zero_evidence"]).lower())
            except ValueError:
                raise ValueError(
                    f"zero_evidence must be one of {[p.value for p in ZeroEvidencePolicy]}, "
                    f"got {kwargs['zero_evidence']!r}"
                ) from None
        if "validate_on_build" in kwargs:
            kwargs["validate_on_build"] = _parse_bool("validate_on_build", kwargs["validate_on_build"])
        if "tolerance" in kwargs:
            kwargs["tolerance"] = float(kwargs["tolerance"])
            if kwargs["tolerance"] < 0:
                raise ValueError("tolerance must be >= 0")
        return cls(**kwargs)


_BOOL_STRINGS = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def load_settings(path: Union[str, Path]) -> EngineSettings:
    """Load EngineSettings from a YAML file (top-level or under ``engine:``)."""
    data = load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    section = data.get("engine", data)
    if not isinstance(section, dict):
        raise ValueError(f"'engine' section in {path} must be a mapping")
    return EngineSettings.from_dict(section)


__all__ = ["ZeroEvidencePolicy", "EngineSettings", "load_yaml", "load_settings"]
