"""packages/core 测试配置 -- 活动数据 fixture"""

from collections.abc import Callable
from datetime import UTC, datetime

import pytest
from eventboard.core.models import Event, EventCategory
from ulid import ULID


@pytest.fixture
def build_event() -> Callable[..., Event]:
    """构造 Event（不写入数据库）"""

    def _build_event(created_by: str, **overrides) -> Event:
        now = datetime.now(UTC)
        data = {
            "event_id": str(ULID()),
            "title": "Talk",
            "description": "d",
            "date": datetime(2025, 1, 1, tzinfo=UTC),
            "category": EventCategory.MEETUP,
            "image_url": "",
            "created_by": created_by,
            "attendees": [],
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return Event(**data)

    return _build_event
