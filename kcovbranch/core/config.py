import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from kcovbranch.core.errors import ConfigError


REPORT_FORMATS = ("text", "json")

# where a marker goes relative to the construct it tags
PLACEMENTS = ("after", "before")

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "annotate": {
        "enabled": False,
        "suffix": "-kcov.c",
        "marker": "/* {tag} */",
        "placement": "after",
    },
    "report": {
        "format": "text",
        "functions": False,
    },
    "parse": {
        "strict": True,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class Config:
    data: Dict[str, Any]

    @classmethod
    def load(cls, path: str | None) -> "Config":
        if not path:
            return cls(DEFAULT_CONFIG)
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {path}")
        raw = config_path.read_text(encoding="utf-8")
        try:
            if config_path.suffix.lower() in {".json"}:
                overrides = json.loads(raw)
            else:
                overrides = yaml.safe_load(raw) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}")
        if not isinstance(overrides, dict):
            raise ConfigError(f"Invalid config file {path}: expected a mapping")
        config = cls(_deep_merge(DEFAULT_CONFIG, overrides))
        config.validate()
        return config

    def with_overrides(self, overrides: Dict[str, Any]) -> "Config":
        config = Config(_deep_merge(self.data, overrides))
        config.validate()
        return config

    def validate(self) -> None:
        if self.report_format() not in REPORT_FORMATS:
            raise ConfigError(f"Unknown report format: {self.report_format()}")
        if "{tag}" not in self.marker_template():
            raise ConfigError("annotate.marker must contain '{tag}'")
        if self.placement() not in PLACEMENTS:
            raise ConfigError(f"Unknown marker placement: {self.placement()}")

    def annotate_enabled(self) -> bool:
        return bool(self.data.get("annotate", {}).get("enabled", False))

    def annotated_suffix(self) -> str:
        return self.data.get("annotate", {}).get("suffix", "-kcov.c")

    def marker_template(self) -> str:
        return self.data.get("annotate", {}).get("marker", "/* {tag} */")

    def placement(self) -> str:
        return self.data.get("annotate", {}).get("placement", "after")

    def report_format(self) -> str:
        return self.data.get("report", {}).get("format", "text")

    def report_functions(self) -> bool:
        return bool(self.data.get("report", {}).get("functions", False))

    def strict_parse(self) -> bool:
        return bool(self.data.get("parse", {}).get("strict", True))
