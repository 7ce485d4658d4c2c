"""
Configuration for FileHelper.

Settings live in a YAML file under a top-level ``filehelper`` key. A missing
or unreadable file yields the defaults.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logger import AuditLogger


DEFAULT_CONFIG_PATH = "filehelper.yaml"


@dataclass
class HelperConfig:
    """Resolved FileHelper settings."""
    audit_enabled: bool = True
    audit_log_path: str = "data/audit_log.jsonl"
    default_pattern: str = "*"
    config_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_path: Optional[str] = None) -> "HelperConfig":
        """Build a config from the parsed ``filehelper`` mapping."""
        audit = data.get("audit")
        if not isinstance(audit, dict):
            audit = {}
        defaults = cls()

        enabled = audit.get("enabled")
        if not isinstance(enabled, bool):
            enabled = defaults.audit_enabled

        default_pattern = data.get("default_pattern")
        if not isinstance(default_pattern, str) or not default_pattern:
            default_pattern = defaults.default_pattern

        log_path = audit.get("log_path")
        if not isinstance(log_path, str) or not log_path:
            log_path = defaults.audit_log_path

        return cls(
            audit_enabled=enabled,
            audit_log_path=log_path,
            default_pattern=default_pattern,
            config_path=config_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "audit": {
                "enabled": self.audit_enabled,
                "log_path": self.audit_log_path,
            },
            "default_pattern": self.default_pattern,
        }

    def make_logger(self) -> Optional[AuditLogger]:
        """Return an AuditLogger for the configured path, or None when auditing is off."""
        if not self.audit_enabled:
            return None
        return AuditLogger(log_path=self.audit_log_path)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> HelperConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        HelperConfig with defaults filled in for anything not set
    """
    path = Path(config_path)
    if not path.exists():
        return HelperConfig(config_path=config_path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return HelperConfig(config_path=config_path)

    if not isinstance(raw, dict):
        return HelperConfig(config_path=config_path)

    section = raw.get("filehelper", raw)
    if not isinstance(section, dict):
        return HelperConfig(config_path=config_path)

    return HelperConfig.from_dict(section, config_path=config_path)


def save_config(config: HelperConfig, config_path: Optional[str] = None) -> None:
    """Save configuration, preserving unrelated keys already in the file."""
    path = Path(config_path or config.config_path or DEFAULT_CONFIG_PATH)
    data: Dict[str, Any] = {"filehelper": config.to_dict()}

    # Merge with existing config
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                existing = yaml.safe_load(f) or {}
            if isinstance(existing, dict):
                existing["filehelper"] = data["filehelper"]
                data = existing
        except (OSError, yaml.YAMLError):
            pass

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False)
