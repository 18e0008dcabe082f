"""BlobUploader 文件系统实现

图片按内容寻址（sha256 + 扩展名）写入 uploads 目录，
返回 media_base_url 下的可访问 URL。相同内容重复上传得到相同 URL。
"""

import hashlib
import mimetypes
from pathlib import Path, PurePath

import structlog

from ..config import MAX_IMAGE_BYTES
from ..exceptions import UploadError
from ..models import ImagePayload

log = structlog.get_logger()


def compute_hash_and_size(content: bytes) -> tuple[str, int]:
    """计算 SHA-256 hash 和内容大小

    Args:
        content: 原始内容字节

    Returns:
        (sha256_hex, size_bytes) 元组
    """
    return hashlib.sha256(content).hexdigest(), len(content)


def _guess_extension(image: ImagePayload) -> str:
    """优先使用原始文件名的扩展名，其次根据 MIME 推断"""
    suffix = PurePath(image.filename).suffix.lower()
    if suffix:
        return suffix
    return mimetypes.guess_extension(image.content_type) or ""


class LocalBlobUploader:
    """BlobUploader 的本地文件系统实现"""

    def __init__(
        self,
        uploads_dir: Path,
        media_base_url: str = "/media",
        max_bytes: int = MAX_IMAGE_BYTES,
    ) -> None:
        self._uploads_dir = uploads_dir
        self._media_base_url = media_base_url.rstrip("/")
        self._max_bytes = max_bytes

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    async def upload(self, image: ImagePayload) -> str:
        """写入图片文件并返回 URL

        Raises:
            UploadError: 空内容、非图片类型、超过大小限制或写入失败
        """
        if not image.data:
            raise UploadError("Image payload is empty")
        if not image.content_type.startswith("image/"):
            raise UploadError(f"Unsupported content type: {image.content_type}")

        hash_hex, size = compute_hash_and_size(image.data)
        if size > self._max_bytes:
            raise UploadError(
                f"Image exceeds maximum size of {self._max_bytes} bytes"
            )

        file_name = f"{hash_hex}{_guess_extension(image)}"
        file_path = self._uploads_dir / file_name
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            if not file_path.exists():
                file_path.write_bytes(image.data)
        except OSError as e:
            raise UploadError(f"Failed to store image: {e.strerror or e}") from e

        log.info("image_uploaded", file_name=file_name, size=size)
        return f"{self._media_base_url}/{file_name}"
