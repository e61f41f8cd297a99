"""Audit settings loader.

Reads overrides from .claude/esmc-config.json under settings.audit and
merges them over the built-in defaults. A broken config file never fails a
capture: the defaults are used instead.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_RELPATH = Path(".claude") / "esmc-config.json"

DEFAULTS = {
    "marker": ".claude",
    "logs_subdir": ".claude/memory/documents/logs",
    "trigger": "execution_complete",
    "esmc_version": "3.65.0",
    "default_mode": "full_deployment",
    "slug_max_tokens": 8,
    "json_indent": 2,
}


class AuditSettings(BaseModel):
    marker: str = DEFAULTS["marker"]
    logs_subdir: str = DEFAULTS["logs_subdir"]
    trigger: str = DEFAULTS["trigger"]
    esmc_version: str = DEFAULTS["esmc_version"]
    default_mode: str = DEFAULTS["default_mode"]
    slug_max_tokens: int = Field(default=DEFAULTS["slug_max_tokens"], ge=1)
    json_indent: int = Field(default=DEFAULTS["json_indent"], ge=0)


def load_audit_settings(project_root: Path | None = None) -> AuditSettings:
    """Load audit settings with defaults, overridden by project config."""
    effective = _deep_copy(DEFAULTS)
    if project_root is None:
        return AuditSettings(**effective)

    config_path = Path(project_root) / CONFIG_RELPATH
    if config_path.exists():
        try:
            cfg = json.loads(config_path.read_text(encoding="utf-8"))
            audit_cfg = cfg.get("settings", {}).get("audit", {})
            if isinstance(audit_cfg, dict):
                _deep_merge(effective, audit_cfg)
        except (json.JSONDecodeError, OSError, AttributeError) as exc:
            logger.warning("Ignoring unreadable audit config %s: %s", config_path, exc)

    try:
        return AuditSettings(**effective)
    except ValidationError as exc:
        logger.warning("Invalid audit settings in %s, using defaults: %s", config_path, exc)
        return AuditSettings()


def _deep_copy(d: dict) -> dict:
    """Simple deep copy for JSON-compatible dicts."""
    return json.loads(json.dumps(d))


def _deep_merge(base: dict, override: dict) -> None:
    """Merge override into base, recursing into nested dicts. Unknown keys are dropped."""
    for key, value in override.items():
        if key not in base:
            continue
        if isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        elif value is not None:
            base[key] = value
