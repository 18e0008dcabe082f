"""活动路由

POST   /api/events                 创建活动（需认证）
GET    /api/events                 活动列表（公开）
PUT    /api/events/{event_id}      部分更新（仅创建者）
DELETE /api/events/{event_id}      删除（仅创建者）
POST   /api/events/{event_id}/join 报名（需认证）

请求体支持 JSON 或 multipart 表单；表单中的 image 文件字段作为活动图片上传。
"""

import json
from typing import Any

from eventboard.core.exceptions import ValidationError
from eventboard.core.models import ImagePayload
from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from starlette.responses import JSONResponse

from ..deps import get_caller_id, get_event_hub, get_store_group
from ..services.event_service import EventService

router = APIRouter()

_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def _read_event_request(
    request: Request,
) -> tuple[dict[str, Any], ImagePayload | None]:
    """读取请求字段和可选图片

    Returns:
        (fields, image) -- image 为 None 表示未上传图片
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        fields = {key: value for key, value in form.items() if isinstance(value, str)}
        image = None
        upload = form.get("image")
        if isinstance(upload, UploadFile) and upload.filename:
            image = ImagePayload(
                filename=upload.filename,
                content_type=upload.content_type or "application/octet-stream",
                data=await upload.read(),
            )
        return fields, image

    raw = await request.body()
    if not raw:
        return {}, None
    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body, None


@router.post("/api/events")
async def create_event(
    request: Request,
    caller_id: str = Depends(get_caller_id),
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """创建活动，返回 201 + 解析后的活动"""
    fields, image = await _read_event_request(request)
    service = EventService(store_group, event_hub)
    event = await service.create_event(fields, caller_id, image)
    return JSONResponse(status_code=201, content=event.to_payload())


@router.get("/api/events")
async def list_events(
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """查询全部活动（创建者、报名者已解析）"""
    service = EventService(store_group, event_hub)
    events = await service.list_events()
    return JSONResponse(
        status_code=200,
        content=[e.to_payload() for e in events],
    )


@router.put("/api/events/{event_id}")
async def update_event(
    event_id: str,
    request: Request,
    caller_id: str = Depends(get_caller_id),
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """部分更新活动，未提供的字段保持不变"""
    fields, image = await _read_event_request(request)
    service = EventService(store_group, event_hub)
    event = await service.update_event(event_id, fields, caller_id, image)
    return JSONResponse(status_code=200, content=event.to_payload())


@router.delete("/api/events/{event_id}")
async def delete_event(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """永久删除活动"""
    service = EventService(store_group, event_hub)
    ack = await service.delete_event(event_id, caller_id)
    return JSONResponse(status_code=200, content=ack)


@router.post("/api/events/{event_id}/join")
async def join_event(
    event_id: str,
    caller_id: str = Depends(get_caller_id),
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """报名活动"""
    service = EventService(store_group, event_hub)
    event = await service.join_event(event_id, caller_id)
    return JSONResponse(status_code=200, content=event.to_payload())
