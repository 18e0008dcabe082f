"""领域模型单元测试

测试内容：
1. 枚举取值
2. ResolvedEvent 对外 JSON 结构
3. EventChanges 空判断
"""

from datetime import UTC, datetime

import pytest
from eventboard.core.models import (
    EventCategory,
    EventChanges,
    NotificationType,
    ResolvedEvent,
    UserSummary,
)
from pydantic import ValidationError as PydanticValidationError


class TestEnums:
    """枚举测试"""

    def test_category_values(self):
        assert {c.value for c in EventCategory} == {"Conference", "Workshop", "Meetup"}

    def test_notification_names(self):
        assert [n.value for n in NotificationType] == [
            "eventCreated",
            "eventUpdated",
            "eventDeleted",
            "attendeeUpdated",
        ]

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            EventCategory("Party")


class TestResolvedEventPayload:
    """ResolvedEvent.to_payload 测试"""

    def _resolved(self, **overrides) -> ResolvedEvent:
        now = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        data = {
            "event_id": "01JEVENT00000000000000000A",
            "title": "Talk",
            "description": "d",
            "date": datetime(2025, 1, 1, tzinfo=UTC),
            "category": EventCategory.MEETUP,
            "created_by": UserSummary(id="u1", name="Alice", email="a@example.com"),
            "attendees": [UserSummary(id="u2", name="Bob", email="b@example.com")],
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return ResolvedEvent(**data)

    def test_payload_uses_wire_names(self):
        payload = self._resolved().to_payload()
        assert set(payload) == {
            "id",
            "title",
            "description",
            "date",
            "category",
            "imageUrl",
            "createdBy",
            "attendees",
            "createdAt",
            "updatedAt",
        }
        assert payload["category"] == "Meetup"
        assert payload["imageUrl"] == ""
        assert payload["date"] == "2025-01-01T00:00:00+00:00"

    def test_payload_resolves_users(self):
        payload = self._resolved().to_payload()
        assert payload["createdBy"] == {"id": "u1", "name": "Alice", "email": "a@example.com"}
        assert payload["attendees"] == [
            {"id": "u2", "name": "Bob", "email": "b@example.com"}
        ]

    def test_payload_with_unresolved_creator(self):
        payload = self._resolved(created_by=None).to_payload()
        assert payload["createdBy"] is None

    def test_category_must_be_enum_member(self):
        with pytest.raises(PydanticValidationError):
            self._resolved(category="Party")


class TestEventChanges:
    """EventChanges 测试"""

    def test_empty_changes(self):
        assert EventChanges().is_empty() is True

    def test_non_empty_changes(self):
        assert EventChanges(title="New").is_empty() is False
