"""
Snap Settings

Explicit configuration for the snap search. Callers pass a ``SnapSettings``
value on every call; ``DEFAULT_SNAP_SETTINGS`` is the constant used when they
do not care.

Settings files are YAML (camelCase keys as in the web client are accepted):

```yaml
enabled: true
threshold: 50
showIndicators: true
strictCompatibility: false
```
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict
import logging
import math

import yaml

logger = logging.getLogger(__name__)

_KEY_ALIASES = {
    "showIndicators": "show_indicators",
    "strictCompatibility": "strict_compatibility",
    "angleTolerance": "angle_tolerance",
}


@dataclass(frozen=True)
class SnapSettings:
    """Configuration for snap detection."""
    enabled: bool = True  # turn off all snapping
    threshold: float = 50.0  # max connector distance for a candidate
    show_indicators: bool = True  # rendering hint only
    strict_compatibility: bool = False  # honour per-connector compatible lists
    angle_tolerance: float = 15.0  # degrees off antiparallel still accepted

    def with_overrides(self, **changes) -> "SnapSettings":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "threshold": self.threshold,
            "show_indicators": self.show_indicators,
            "strict_compatibility": self.strict_compatibility,
            "angle_tolerance": self.angle_tolerance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapSettings":
        """Build settings from a mapping, rejecting unknown keys."""
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ValueError(f"Unknown snap setting: {key}")
            values[name] = value

        settings = cls(
            enabled=bool(values.get("enabled", True)),
            threshold=float(values.get("threshold", 50.0)),
            show_indicators=bool(values.get("show_indicators", True)),
            strict_compatibility=bool(values.get("strict_compatibility", False)),
            angle_tolerance=float(values.get("angle_tolerance", 15.0)),
        )
        if not math.isfinite(settings.threshold) or settings.threshold < 0:
            raise ValueError(
                f"Snap threshold must be finite and non-negative: {settings.threshold}"
            )
        if not math.isfinite(settings.angle_tolerance) or settings.angle_tolerance < 0:
            raise ValueError(
                f"Angle tolerance must be finite and non-negative: {settings.angle_tolerance}"
            )
        return settings


DEFAULT_SNAP_SETTINGS = SnapSettings()


def load_snap_settings(path: Path) -> SnapSettings:
    """Load snap settings from a YAML file."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ValueError(f"Malformed snap settings {path}: {e}") from e
    if data is None:
        return DEFAULT_SNAP_SETTINGS
    if not isinstance(data, dict):
        raise ValueError(f"Snap settings must be a mapping: {path}")
    settings = SnapSettings.from_dict(data)
    logger.debug("Loaded snap settings from %s: %s", path, settings)
    return settings
