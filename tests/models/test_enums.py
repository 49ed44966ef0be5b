"""Tests for the enum TypeDecorator."""

import pytest

from pm_web_svc.models.enums import EnumValueType, Priority, TaskStatus, enum_value


class TestEnumValueType:
    """Test cases for EnumValueType bind and result processing."""

    def test_bind_accepts_member_and_value(self):
        column_type = EnumValueType(Priority)

        assert column_type.process_bind_param(Priority.HIGH, None) == "high"
        assert column_type.process_bind_param("urgent", None) == "urgent"
        assert column_type.process_bind_param(None, None) is None

    def test_bind_rejects_unknown_value(self):
        with pytest.raises(ValueError, match="Invalid TaskStatus value"):
            EnumValueType(TaskStatus).process_bind_param("Done", None)

    def test_result_returns_member(self):
        assert EnumValueType(TaskStatus).process_result_value("in_progress", None) == TaskStatus.IN_PROGRESS

    def test_enum_value(self):
        assert enum_value(Priority.LOW) == "low"
        assert enum_value(None) is None
