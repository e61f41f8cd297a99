"""Tests for audit settings loading."""

import json

from collab_audit.config import DEFAULTS, AuditSettings, load_audit_settings


def _write_config(root, payload):
    (root / ".claude").mkdir(exist_ok=True)
    (root / ".claude" / "esmc-config.json").write_text(
        payload if isinstance(payload, str) else json.dumps(payload)
    )


def test_defaults_without_root():
    settings = load_audit_settings()
    assert settings == AuditSettings()
    assert settings.logs_subdir == ".claude/memory/documents/logs"
    assert settings.slug_max_tokens == 8
    assert settings.json_indent == 2


def test_defaults_when_file_missing(tmp_path):
    assert load_audit_settings(tmp_path).model_dump() == DEFAULTS


def test_overrides_merged(tmp_path):
    _write_config(tmp_path, {"settings": {"audit": {"esmc_version": "3.70.0", "default_mode": "lite"}}})
    settings = load_audit_settings(tmp_path)
    assert settings.esmc_version == "3.70.0"
    assert settings.default_mode == "lite"
    assert settings.trigger == DEFAULTS["trigger"]


def test_null_and_unknown_overrides_ignored(tmp_path):
    _write_config(tmp_path, {"settings": {"audit": {"trigger": None, "colour": "blue"}}})
    settings = load_audit_settings(tmp_path)
    assert settings.trigger == DEFAULTS["trigger"]


def test_corrupt_file_falls_back(tmp_path, caplog):
    _write_config(tmp_path, "{ nope")
    with caplog.at_level("WARNING", logger="collab_audit.config"):
        settings = load_audit_settings(tmp_path)
    assert settings == AuditSettings()
    assert "Ignoring unreadable audit config" in caplog.text


def test_invalid_values_fall_back(tmp_path):
    _write_config(tmp_path, {"settings": {"audit": {"slug_max_tokens": 0}}})
    assert load_audit_settings(tmp_path) == AuditSettings()


def test_non_dict_settings_section(tmp_path):
    _write_config(tmp_path, {"settings": ["not", "a", "dict"]})
    assert load_audit_settings(tmp_path) == AuditSettings()


def test_defaults_not_mutated(tmp_path):
    _write_config(tmp_path, {"settings": {"audit": {"trigger": "changed"}}})
    load_audit_settings(tmp_path)
    assert DEFAULTS["trigger"] == "execution_complete"
