"""
维修管理路由
"""
from fastapi import APIRouter, Depends, HTTPException, status

from hotelops.dependencies import get_container, to_ui_list, to_ui_or_none
from hotelops.models.schemas import TaskStatusUpdate, WorkOrderCreate, WorkOrderUpdate
from hotelops.services.container import ServiceContainer

router = APIRouter(prefix="/maintenance", tags=["维修管理"])


@router.get("/work-orders")
async def list_work_orders(container: ServiceContainer = Depends(get_container)):
    """获取维修工单列表"""
    return to_ui_list(await container.maintenance.get_all_work_orders())


@router.get("/work-orders/{order_id}")
async def get_work_order(order_id: int, container: ServiceContainer = Depends(get_container)):
    """获取单个工单"""
    order = await container.maintenance.get_work_order_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="工单不存在")
    return order.to_ui()


@router.post("/work-orders")
async def create_work_order(data: WorkOrderCreate, container: ServiceContainer = Depends(get_container)):
    """创建工单"""
    return to_ui_or_none(await container.maintenance.create_work_order(data))


@router.put("/work-orders/{order_id}")
async def update_work_order(
    order_id: int,
    data: WorkOrderUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """更新工单"""
    return to_ui_or_none(await container.maintenance.update_work_order(order_id, data))


@router.put("/work-orders/{order_id}/status")
async def update_work_order_status(
    order_id: int,
    data: TaskStatusUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """变更工单状态"""
    return to_ui_or_none(await container.maintenance.update_work_order_status(order_id, data.status))


@router.delete("/work-orders/{order_id}")
async def delete_work_order(order_id: int, container: ServiceContainer = Depends(get_container)):
    """删除工单"""
    return {"success": await container.maintenance.delete_work_order(order_id)}


@router.get("/stats")
async def get_maintenance_stats(container: ServiceContainer = Depends(get_container)):
    """工单统计"""
    return (await container.maintenance.get_maintenance_stats()).to_ui()


@router.get("/equipment")
async def list_equipment(container: ServiceContainer = Depends(get_container)):
    """设备列表"""
    return to_ui_list(await container.maintenance.get_all_equipment())


@router.get("/vendors")
async def list_vendors(container: ServiceContainer = Depends(get_container)):
    """供应商列表"""
    return to_ui_list(await container.maintenance.get_all_vendors())
