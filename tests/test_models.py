"""Tests for shared data models."""

from datetime import datetime, timezone

import pytest

from prreviews.models import ACTION_GLYPH, ACTION_PRIORITY, Activity, ActivityAction


class TestActivityAction:
    """Tests for review state normalization."""

    @pytest.mark.parametrize("state,expected", [
        ("APPROVED", ActivityAction.APPROVED),
        ("approved", ActivityAction.APPROVED),
        ("changes_requested", ActivityAction.CHANGES_REQUESTED),
        ("COMMENTED", ActivityAction.COMMENTED),
        ("DISMISSED", ActivityAction.OTHER),
        ("PENDING", ActivityAction.OTHER),
        ("", ActivityAction.OTHER),
        (None, ActivityAction.OTHER),
    ])
    def test_from_state(self, state, expected):
        """Test states map case-insensitively, unknown ones to OTHER."""
        assert ActivityAction.from_state(state) is expected

    def test_priority_table_order(self):
        """Test approvals outrank change requests, which outrank comments."""
        assert ACTION_PRIORITY[ActivityAction.APPROVED] == 3
        assert ACTION_PRIORITY[ActivityAction.CHANGES_REQUESTED] == 2
        assert ACTION_PRIORITY[ActivityAction.COMMENTED] == 1
        assert ACTION_PRIORITY[ActivityAction.OTHER] == 0

    def test_every_action_has_a_glyph(self):
        """Test the glyph table covers all actions."""
        assert set(ACTION_GLYPH) == set(ActivityAction)
        assert ACTION_GLYPH[ActivityAction.APPROVED] == "✅"
        assert ACTION_GLYPH[ActivityAction.OTHER] == "\U0001f441\ufe0f"


class TestActivity:
    """Tests for Activity."""

    def test_naive_timestamp_becomes_utc(self):
        """Test naive datetimes are treated as UTC."""
        activity = Activity("t", "u", ActivityAction.COMMENTED, datetime(2025, 1, 1, 9, 0))
        assert activity.created_at.tzinfo == timezone.utc

    def test_is_complete(self):
        """Test completeness requires both title and URL."""
        when = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert Activity("t", "u", ActivityAction.COMMENTED, when).is_complete is True
        assert Activity("", "u", ActivityAction.COMMENTED, when).is_complete is False
        assert Activity("t", "", ActivityAction.COMMENTED, when).is_complete is False

    def test_priority(self):
        """Test priority reads from the action table."""
        when = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert Activity("t", "u", ActivityAction.APPROVED, when).priority == 3
