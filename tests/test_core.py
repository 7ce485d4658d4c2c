"""
Tests for the core module: audit logger, configuration and errors.
"""

import json
import pytest
import tempfile
import os
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml

from core.config import HelperConfig, load_config, save_config
from core.errors import FileHelperError, NotFoundError, InvalidArgumentError, FileOperationError
from core.logger import AuditLogger, AuditEntry, ActionType, ActionStatus


class TestErrors:
    """Test the error hierarchy."""

    def test_builtin_compatibility(self):
        assert issubclass(NotFoundError, FileNotFoundError)
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(FileOperationError, OSError)

    def test_common_base(self):
        for cls in (NotFoundError, InvalidArgumentError, FileOperationError):
            assert issubclass(cls, FileHelperError)

    def test_failures_default_empty(self):
        assert FileOperationError("boom").failures == []
        error = FileOperationError("boom", failures=[("a.txt", "locked")])
        assert error.failures == [("a.txt", "locked")]
        assert str(error) == "boom"


class TestAuditEntry:
    """Test AuditEntry dataclass."""

    def test_create_sets_values(self):
        entry = AuditEntry.create(
            action_type=ActionType.MOVE,
            action_description="Moved a.txt",
            target="/out/a.txt",
            status=ActionStatus.SKIPPED
        )

        assert entry.action_type == "move"
        assert entry.status == "skipped"
        assert entry.target == "/out/a.txt"
        assert entry.metadata == {}

    def test_json_round_trip(self):
        entry = AuditEntry.create(ActionType.DELETE, "Deleted a.txt", metadata={"size": 3})
        assert AuditEntry.from_json(entry.to_json()) == entry


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            yield f.name
        os.unlink(f.name)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger with temp file."""
        return AuditLogger(log_path=temp_log)

    def test_creates_log_directory(self, tmp_path):
        log_path = tmp_path / "nested" / "audit.jsonl"
        AuditLogger(log_path=str(log_path))
        assert log_path.exists()

    def test_log_action(self, logger):
        """Test logging an action."""
        entry = logger.log_action(
            action_type=ActionType.COPY,
            description="Test action",
            status=ActionStatus.EXECUTED
        )

        assert entry.action_description == "Test action"
        assert entry.status == "executed"

    def test_get_recent(self, logger):
        """Test getting recent entries, most recent first."""
        for i in range(5):
            logger.log_action(
                action_type=ActionType.MOVE,
                description=f"Action {i}"
            )

        entries = logger.get_recent(limit=3)

        assert [e.action_description for e in entries] == ["Action 4", "Action 3", "Action 2"]

    def test_skips_corrupt_lines(self, logger):
        logger.log_action(ActionType.CREATE, "Good")
        with open(logger.log_path, "a", encoding="utf-8") as f:
            f.write("not json\n")
            f.write(json.dumps({"unexpected": 1}) + "\n")

        assert [e.action_description for e in logger.get_recent()] == ["Good"]

    def test_get_by_action_type(self, logger):
        logger.log_action(ActionType.MOVE, "Move")
        logger.log_action(ActionType.DELETE, "Delete")
        logger.log_action(ActionType.MOVE, "Move again")

        moves = logger.get_by_action_type(ActionType.MOVE)

        assert [e.action_description for e in moves] == ["Move", "Move again"]

    def test_get_failed_actions(self, logger):
        """Test getting failed actions."""
        logger.log_action(
            action_type=ActionType.DELETE,
            description="Failed delete",
            status=ActionStatus.FAILED,
            result="Error: locked"
        )
        logger.log_action(ActionType.DELETE, "Good delete")

        failed = logger.get_failed_actions()

        assert len(failed) == 1
        assert failed[0].action_description == "Failed delete"

    def test_get_failed_actions_most_recent_first(self, logger):
        for i in range(4):
            logger.log_action(ActionType.MOVE, f"Failure {i}", status=ActionStatus.FAILED)
            logger.log_action(ActionType.MOVE, f"Success {i}")

        failed = logger.get_failed_actions(limit=2)

        assert [e.action_description for e in failed] == ["Failure 3", "Failure 2"]

    def test_export(self, logger):
        logger.log_action(ActionType.COPY, "Copied a", target="/out/a")

        exported = json.loads(logger.export("json"))
        assert exported[0]["action_description"] == "Copied a"

        csv = logger.export("csv").splitlines()
        assert csv[0].startswith("timestamp,")
        assert '"Copied a"' in csv[1]

        with pytest.raises(ValueError):
            logger.export("xml")

    def test_clear_requires_confirmation(self, tmp_path):
        logger = AuditLogger(log_path=str(tmp_path / "audit.jsonl"))
        logger.log_action(ActionType.MOVE, "Move")

        assert logger.clear() is False
        assert len(logger.get_recent()) == 1

        assert logger.clear(confirm=True) is True
        assert logger.get_recent() == []
        assert len(list(tmp_path.glob("audit.backup.*.jsonl"))) == 1


class TestConfig:
    """Test YAML configuration loading."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config.audit_enabled is True
        assert config.audit_log_path == "data/audit_log.jsonl"
        assert config.default_pattern == "*"

    def test_load_values(self, tmp_path):
        path = tmp_path / "filehelper.yaml"
        path.write_text("""filehelper:
  audit:
    enabled: false
    log_path: logs/audit.jsonl
  default_pattern: "*.csv"
""")
        config = load_config(str(path))

        assert config.audit_enabled is False
        assert config.audit_log_path == "logs/audit.jsonl"
        assert config.default_pattern == "*.csv"
        assert config.make_logger() is None

    def test_invalid_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "filehelper.yaml"
        path.write_text("filehelper: [unclosed\n")
        assert load_config(str(path)).default_pattern == "*"

    def test_scalar_audit_section_gives_defaults(self, tmp_path):
        path = tmp_path / "filehelper.yaml"
        path.write_text("filehelper:\n  audit: disabled\n")

        config = load_config(str(path))

        assert config.audit_enabled is True
        assert config.audit_log_path == "data/audit_log.jsonl"

    def test_non_bool_enabled_ignored(self, tmp_path):
        path = tmp_path / "filehelper.yaml"
        path.write_text("""filehelper:
  audit:
    enabled: "false"
    log_path: 42
  default_pattern: 7
""")
        config = load_config(str(path))

        assert config.audit_enabled is True
        assert config.audit_log_path == "data/audit_log.jsonl"
        assert config.default_pattern == "*"

    def test_make_logger(self, tmp_path):
        config = HelperConfig(audit_log_path=str(tmp_path / "audit.jsonl"))
        logger = config.make_logger()
        assert isinstance(logger, AuditLogger)
        assert logger.log_path == tmp_path / "audit.jsonl"

    def test_save_preserves_other_keys(self, tmp_path):
        path = tmp_path / "filehelper.yaml"
        path.write_text("other:\n  key: value\n")

        save_config(HelperConfig(default_pattern="*.log"), str(path))

        data = yaml.safe_load(path.read_text())
        assert data["other"] == {"key": "value"}
        assert data["filehelper"]["default_pattern"] == "*.log"
        assert load_config(str(path)).default_pattern == "*.log"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
