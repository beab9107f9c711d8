"""
员工管理路由
"""
from fastapi import APIRouter, Depends, HTTPException, status

from hotelops.dependencies import get_container, to_ui_list, to_ui_or_none
from hotelops.models.schemas import StaffCreate, StaffUpdate
from hotelops.services.container import ServiceContainer

router = APIRouter(prefix="/staff", tags=["员工管理"])


@router.get("")
async def list_staff(container: ServiceContainer = Depends(get_container)):
    """获取员工列表"""
    return to_ui_list(await container.staff.get_all())


@router.get("/performance")
async def get_staff_performance(container: ServiceContainer = Depends(get_container)):
    """员工绩效"""
    return to_ui_list(await container.staff.get_staff_performance())


@router.get("/{staff_id}")
async def get_staff(staff_id: int, container: ServiceContainer = Depends(get_container)):
    """获取单个员工"""
    member = await container.staff.get_by_id(staff_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="员工不存在")
    return member.to_ui()


@router.post("")
async def create_staff(data: StaffCreate, container: ServiceContainer = Depends(get_container)):
    """创建员工"""
    return to_ui_or_none(await container.staff.create(data))


@router.put("/{staff_id}")
async def update_staff(
    staff_id: int,
    data: StaffUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """更新员工"""
    return to_ui_or_none(await container.staff.update(staff_id, data))


@router.delete("/{staff_id}")
async def delete_staff(staff_id: int, container: ServiceContainer = Depends(get_container)):
    """删除员工"""
    return {"success": await container.staff.delete(staff_id)}
