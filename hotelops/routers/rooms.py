"""
房间管理路由
房间不存在时返回 404
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from hotelops.dependencies import get_container, to_ui_list, to_ui_or_none
from hotelops.models.schemas import (
    BulkRoomBlock, BulkRoomStatusUpdate, GuestAssignment, Room, RoomBlock, RoomCreate,
    RoomNoteCreate, RoomStatusUpdate, RoomUpdate,
)
from hotelops.services.container import ServiceContainer
from hotelops.services.room_service import RoomNotFoundError

router = APIRouter(prefix="/rooms", tags=["房间管理"])


async def existing_room(room_id: int, container: ServiceContainer = Depends(get_container)) -> Room:
    """路径中的房间必须存在，否则 404"""
    try:
        return await container.rooms.get_by_id(room_id)
    except RoomNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ============== 查询 ==============

@router.get("")
async def list_rooms(
    floor: Optional[int] = Query(None, description="按楼层过滤"),
    room_status: Optional[str] = Query(None, alias="status", description="按状态过滤"),
    q: Optional[str] = Query(None, description="按房间号或客人姓名搜索"),
    container: ServiceContainer = Depends(get_container)
):
    """获取房间列表"""
    rooms = container.rooms
    if q is not None:
        return to_ui_list(await rooms.search(q))
    if floor is not None:
        return to_ui_list(await rooms.get_by_floor(floor))
    if room_status is not None:
        return to_ui_list(await rooms.get_by_status(room_status))
    return to_ui_list(await rooms.get_all())


@router.get("/stats")
async def get_room_stats(container: ServiceContainer = Depends(get_container)):
    """房态统计"""
    return (await container.rooms.get_room_stats()).to_ui()


@router.get("/{room_id}")
async def get_room(room: Room = Depends(existing_room)):
    """获取单个房间"""
    return room.to_ui()


# ============== 增删改 ==============

@router.post("")
async def create_room(data: RoomCreate, container: ServiceContainer = Depends(get_container)):
    """创建房间"""
    return to_ui_or_none(await container.rooms.create(data))


@router.put("/{room_id}")
async def update_room(
    data: RoomUpdate,
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """更新房间属性"""
    return to_ui_or_none(await container.rooms.update_room(room.id, data))


@router.delete("/{room_id}")
async def delete_room(room_id: int, container: ServiceContainer = Depends(get_container)):
    """删除房间"""
    return {"success": await container.rooms.delete(room_id)}


# ============== 批量操作 ==============
# 须在 /{room_id}/... 路由之前注册

@router.post("/bulk/status")
async def bulk_update_status(
    data: BulkRoomStatusUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """批量变更状态"""
    return to_ui_list(await container.rooms.bulk_update_status(data.room_ids, data.status))


@router.post("/bulk/block")
async def bulk_block_rooms(data: BulkRoomBlock, container: ServiceContainer = Depends(get_container)):
    """批量封锁"""
    return to_ui_list(await container.rooms.bulk_block_rooms(data.room_ids, data.reason))


# ============== 状态流转 ==============

@router.put("/{room_id}/status")
async def update_room_status(
    data: RoomStatusUpdate,
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """变更房间状态"""
    return to_ui_or_none(await container.rooms.update_status(room.id, data.status))


@router.post("/{room_id}/cleaning-complete")
async def mark_cleaning_complete(
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """清洁完成，房间恢复可用"""
    return to_ui_or_none(await container.rooms.mark_cleaning_complete(room.id))


@router.post("/{room_id}/assign-guest")
async def assign_guest(
    data: GuestAssignment,
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """入住"""
    return to_ui_or_none(await container.rooms.assign_guest(room.id, data))


@router.post("/{room_id}/checkout")
async def checkout_guest(
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """退房"""
    return to_ui_or_none(await container.rooms.checkout_guest(room.id))


@router.post("/{room_id}/block")
async def block_room(
    data: RoomBlock,
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """封锁房间"""
    return to_ui_or_none(await container.rooms.block_room(room.id, data.reason))


@router.post("/{room_id}/unblock")
async def unblock_room(
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """解除封锁"""
    return to_ui_or_none(await container.rooms.unblock_room(room.id))


# ============== 备注 ==============

@router.post("/{room_id}/notes")
async def add_note(
    data: RoomNoteCreate,
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """添加备注"""
    return to_ui_or_none(await container.rooms.add_note(room.id, data.content))


@router.delete("/{room_id}/notes/{note_id}")
async def delete_note(
    note_id: int,
    room: Room = Depends(existing_room),
    container: ServiceContainer = Depends(get_container)
):
    """删除备注"""
    return to_ui_or_none(await container.rooms.delete_note(room.id, note_id))
