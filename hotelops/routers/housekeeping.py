"""
清洁任务路由
任务不存在时返回 404
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from hotelops.dependencies import get_container, to_ui_list, to_ui_or_none
from hotelops.models.schemas import (
    BulkAssignment, HousekeepingTaskCreate, TaskAssignment, TaskStatusUpdate,
)
from hotelops.services.container import ServiceContainer
from hotelops.services.housekeeping_service import TaskNotFoundError

router = APIRouter(prefix="/housekeeping", tags=["清洁管理"])


# ============== 任务 ==============

@router.get("/tasks")
async def list_tasks(
    task_status: Optional[str] = Query(None, alias="status", description="按状态过滤"),
    container: ServiceContainer = Depends(get_container)
):
    """获取清洁任务列表"""
    if task_status:
        return to_ui_list(await container.housekeeping.get_tasks_by_status(task_status))
    return to_ui_list(await container.housekeeping.get_all_tasks())


@router.get("/tasks/{task_id}")
async def get_task(task_id: int, container: ServiceContainer = Depends(get_container)):
    """获取单个任务"""
    try:
        return (await container.housekeeping.get_task_by_id(task_id)).to_ui()
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/tasks")
async def create_task(data: HousekeepingTaskCreate, container: ServiceContainer = Depends(get_container)):
    """创建清洁任务"""
    return to_ui_or_none(await container.housekeeping.create_task(data))


@router.put("/tasks/{task_id}/status")
async def update_task_status(
    task_id: int,
    data: TaskStatusUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """变更任务状态"""
    return to_ui_or_none(await container.housekeeping.update_task_status(task_id, data.status))


@router.post("/tasks/{task_id}/assign")
async def assign_task(
    task_id: int,
    data: TaskAssignment,
    container: ServiceContainer = Depends(get_container)
):
    """指派任务"""
    return to_ui_or_none(await container.housekeeping.assign_task(task_id, data.staff_id))


@router.post("/tasks/bulk-assign")
async def bulk_assign_tasks(
    data: List[BulkAssignment],
    container: ServiceContainer = Depends(get_container)
):
    """按房间批量创建并指派任务"""
    return to_ui_list(await container.housekeeping.bulk_assign_tasks(data))


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: int, container: ServiceContainer = Depends(get_container)):
    """删除任务"""
    return {"success": await container.housekeeping.delete_task(task_id)}


# ============== 员工与统计 ==============

@router.get("/staff")
async def list_housekeeping_staff(
    available: bool = Query(False, description="只返回可指派的员工"),
    container: ServiceContainer = Depends(get_container)
):
    """获取员工列表"""
    if available:
        return to_ui_list(await container.housekeeping.get_available_staff())
    return to_ui_list(await container.housekeeping.get_all_staff())


@router.get("/stats")
async def get_housekeeping_stats(container: ServiceContainer = Depends(get_container)):
    """清洁统计"""
    return (await container.housekeeping.get_housekeeping_stats()).to_ui()
