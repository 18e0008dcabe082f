"""活动字段校验

把请求中的原始字段（JSON 或表单）转换为 EventDraft / EventChanges。
所有失败统一抛出 ValidationError。
"""

from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

from .exceptions import ValidationError
from .models import EventCategory, EventChanges, EventDraft

REQUIRED_FIELDS = ("title", "description", "date", "category")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_text(value: Any, field: str) -> str:
    """校验非空文本字段"""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field=field)
    text = value.strip()
    if not text:
        raise ValidationError(f"{field} is required", field=field)
    return text


def parse_date(value: Any) -> datetime:
    """解析 ISO-8601 日期或日期时间，统一为 UTC

    纯日期（如 2025-01-01）视为当天 00:00 UTC；无时区的时间视为 UTC。
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(
                f"date must be an ISO-8601 date or datetime, got {value!r}",
                field="date",
            ) from None
    else:
        raise ValidationError("date must be an ISO-8601 string", field="date")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        # 换算到 UTC 后超出 datetime 的年份范围
        raise ValidationError("date out of range", field="date") from None


def parse_category(value: Any) -> EventCategory:
    """校验分类属于固定枚举"""
    try:
        return EventCategory(value)
    except ValueError:
        allowed = ", ".join(c.value for c in EventCategory)
        raise ValidationError(
            f"category must be one of: {allowed}",
            field="category",
        ) from None


def validate_new_event(fields: Mapping[str, Any]) -> EventDraft:
    """校验创建请求：title/description/date/category 全部必填

    Raises:
        ValidationError: 缺少字段或字段格式错误
    """
    missing = [name for name in REQUIRED_FIELDS if _is_blank(fields.get(name))]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            field=missing[0],
        )

    return EventDraft(
        title=parse_text(fields["title"], "title"),
        description=parse_text(fields["description"], "description"),
        date=parse_date(fields["date"]),
        category=parse_category(fields["category"]),
    )


def validate_event_changes(fields: Mapping[str, Any]) -> EventChanges:
    """校验部分更新请求

    缺失或空白的字段视为不修改；出现的字段按创建时的规则校验。

    Raises:
        ValidationError: 出现的字段格式错误
    """
    changes = EventChanges()
    if not _is_blank(fields.get("title")):
        changes.title = parse_text(fields["title"], "title")
    if not _is_blank(fields.get("description")):
        changes.description = parse_text(fields["description"], "description")
    if not _is_blank(fields.get("date")):
        changes.date = parse_date(fields["date"])
    if not _is_blank(fields.get("category")):
        changes.category = parse_category(fields["category"])
    return changes
