"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，任一检查失败返回 503。
"""

import shutil
from pathlib import Path

import structlog
from eventboard.core.store import StoreGroup
from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from ..deps import get_store_group

log = structlog.get_logger()

router = APIRouter()


async def _check_sqlite(store_group: StoreGroup) -> str:
    try:
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
    except Exception as e:
        log.warning("readiness_sqlite_failed", error_type=type(e).__name__)
        return "unavailable"
    return "ok"


def _check_uploads_dir(uploads_dir: Path) -> str:
    try:
        return "ok" if uploads_dir.is_dir() else "missing"
    except OSError as e:
        log.warning("readiness_uploads_dir_failed", error_type=type(e).__name__)
        return "unavailable"


def _free_disk_mb(uploads_dir: Path) -> int | None:
    """uploads 所在磁盘的剩余空间；目录不存在时退回到其最近的已存在父目录"""
    probe = uploads_dir
    while not probe.exists() and probe != probe.parent:
        probe = probe.parent
    try:
        return shutil.disk_usage(probe).free // (1024 * 1024)
    except OSError:
        return None


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(store_group: StoreGroup = Depends(get_store_group)):
    """Readiness 检查

    检查项：
    1. sqlite: 数据库连通性
    2. uploads_dir: 图片目录是否存在
    3. disk_space_mb: uploads 所在磁盘剩余空间
    """
    uploads_dir = Path(store_group.blob_uploader.uploads_dir)
    free_mb = _free_disk_mb(uploads_dir)
    checks = {
        "sqlite": await _check_sqlite(store_group),
        "uploads_dir": _check_uploads_dir(uploads_dir),
        "disk_space_mb": free_mb if free_mb is not None else 0,
    }
    all_ok = (
        checks["sqlite"] == "ok"
        and checks["uploads_dir"] == "ok"
        and free_mb is not None
    )

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )
