"""活动归属判定

权限只取决于 caller 与 created_by 是否为同一用户，没有角色或委托。
"""

from .models import Event


def is_creator(caller_id: str | None, event: Event) -> bool:
    """判断调用者是否为活动创建者

    Args:
        caller_id: 调用者 user_id（未认证时为 None）
        event: 存储中的活动记录

    Returns:
        True 如果调用者为创建者
    """
    if not caller_id:
        return False
    return event.created_by == caller_id
