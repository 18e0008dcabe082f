"""EventBoard 异常体系

每个异常携带稳定的 code，由 gateway 翻译为 HTTP 状态和错误响应体。
"""


class EventBoardError(Exception):
    """EventBoard 基础异常"""

    code: str = "UNKNOWN_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(EventBoardError):
    """必填字段缺失或格式错误"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        """
        Args:
            message: 错误描述
            field: 出错的字段名（可选）
        """
        super().__init__(message)
        self.field = field


class AuthenticationError(EventBoardError):
    """凭证缺失或无效"""

    code = "AUTHENTICATION_FAILED"


class AuthorizationError(EventBoardError):
    """调用者不是活动创建者"""

    code = "NOT_AUTHORIZED"

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message)


class NotFoundError(EventBoardError):
    """活动不存在"""

    code = "EVENT_NOT_FOUND"

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event with id {event_id} does not exist")
        self.event_id = event_id


class DuplicateError(EventBoardError):
    """重复报名"""

    code = "ALREADY_JOINED"

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__("You have already joined this event")
        self.event_id = event_id
        self.user_id = user_id


class UploadError(EventBoardError):
    """图片上传失败

    上传发生在任何写入之前，抛出时活动记录保持不变。
    """

    code = "UPLOAD_FAILED"


class IntegrityError(EventBoardError):
    """写入后引用解析失败（创建者无法解析），说明存储数据不一致

    此异常抛出时不广播、不返回成功结果，但已提交的记录保留在存储中。
    """

    code = "INTEGRITY_ERROR"

    def __init__(self, event_id: str) -> None:
        super().__init__("Error: createdBy is missing")
        self.event_id = event_id


class UnknownError(EventBoardError):
    """协作方出现的未预期错误"""

    code = "UNKNOWN_ERROR"
