"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、上传目录、图片大小限制、SSE 参数等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("EVENTBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "EVENTBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "eventboard.db"),
    )


def get_uploads_dir() -> Path:
    """获取图片上传存储目录"""
    return Path(
        os.environ.get(
            "EVENTBOARD_UPLOADS_DIR",
            str(_get_base_dir() / "uploads"),
        )
    )


# 单张图片最大字节数（默认 5MB）
MAX_IMAGE_BYTES: int = int(os.environ.get("EVENTBOARD_MAX_IMAGE_BYTES", "5242880"))

# SSE 心跳间隔（秒）
SSE_HEARTBEAT_INTERVAL: int = int(
    os.environ.get("EVENTBOARD_SSE_HEARTBEAT_INTERVAL", "15")
)

# 每个订阅者的队列容量，写满即视为掉线
SSE_QUEUE_MAXSIZE: int = int(os.environ.get("EVENTBOARD_SSE_QUEUE_MAXSIZE", "100"))
