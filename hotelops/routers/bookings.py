"""
预订管理路由
"""
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query

from hotelops.dependencies import get_container, to_ui_list, to_ui_or_none
from hotelops.models.schemas import BookingCreate, BookingStatusUpdate, BookingUpdate
from hotelops.services.container import ServiceContainer

router = APIRouter(prefix="/bookings", tags=["预订管理"])


@router.get("")
async def list_bookings(
    status: Optional[str] = Query(None, description="按状态过滤"),
    container: ServiceContainer = Depends(get_container)
):
    """获取预订列表"""
    return to_ui_list(await container.bookings.get_all(status))


@router.get("/available-rooms")
async def list_available_rooms(container: ServiceContainer = Depends(get_container)):
    """获取可预订房间"""
    return to_ui_list(await container.bookings.get_available_rooms())


@router.get("/{booking_id}")
async def get_booking(booking_id: int, container: ServiceContainer = Depends(get_container)):
    """获取单个预订（不存在时返回 null）"""
    return to_ui_or_none(await container.bookings.get_by_id(booking_id))


@router.post("")
async def create_bookings(
    data: Union[BookingCreate, List[BookingCreate]],
    container: ServiceContainer = Depends(get_container)
):
    """创建一个或多个预订"""
    return to_ui_list(await container.bookings.create(data))


@router.put("/{booking_id}")
async def update_booking(
    booking_id: int,
    data: BookingUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """更新预订"""
    return to_ui_or_none(await container.bookings.update(booking_id, data))


@router.put("/{booking_id}/status")
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """更新预订状态"""
    return to_ui_or_none(await container.bookings.update_status(booking_id, data.status))


@router.delete("/{booking_id}")
async def delete_booking(booking_id: int, container: ServiceContainer = Depends(get_container)):
    """删除预订"""
    return {"success": await container.bookings.delete(booking_id)}
