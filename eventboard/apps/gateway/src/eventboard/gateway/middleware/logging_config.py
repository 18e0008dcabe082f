"""structlog 配置模块

EVENTBOARD_LOG_FORMAT:
  - "dev"（默认）：ConsoleRenderer 可读输出
  - "json"：结构化 JSON 输出（生产环境）
EVENTBOARD_LOG_LEVEL: 根 logger 级别（默认 INFO）
Logfire APM：LOGFIRE_SEND_TO_LOGFIRE 环境变量控制，false 时降级为纯本地日志。
"""

import logging
import os

import structlog

# 这些库在 DEBUG 级别输出过多，固定为 WARNING
_NOISY_LOGGERS = ("aiosqlite", "multipart", "sse_starlette")


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging() -> None:
    """初始化 structlog 并桥接标准库 logging"""
    log_format = os.environ.get("EVENTBOARD_LOG_FORMAT", "dev")
    log_level = os.environ.get("EVENTBOARD_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_build_renderer(log_format),
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logfire() -> None:
    """Logfire 可选初始化

    LOGFIRE_SEND_TO_LOGFIRE 环境变量控制：
    - "true": 启用 Logfire APM（需要 LOGFIRE_TOKEN）
    - "false" (默认): 降级为纯本地日志
    """
    send_to_logfire = os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower()
    if send_to_logfire != "true":
        return
    try:
        import logfire

        logfire.configure(service_name="eventboard-gateway")
        logfire.instrument_fastapi()
    except Exception:
        # Logfire 初始化失败不影响系统运行
        structlog.get_logger().warning(
            "logfire_init_failed",
            message="Logfire 初始化失败，降级为纯本地日志",
        )
