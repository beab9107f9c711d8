"""
支付管理路由
"""
from fastapi import APIRouter, Depends, HTTPException, status

from hotelops.dependencies import get_container, to_ui_list, to_ui_or_none
from hotelops.models.schemas import PaymentCreate, PaymentUpdate
from hotelops.services.container import ServiceContainer

router = APIRouter(prefix="/payments", tags=["支付管理"])


@router.get("")
async def list_payments(container: ServiceContainer = Depends(get_container)):
    """获取支付记录"""
    return to_ui_list(await container.payments.get_all())


@router.get("/stats")
async def get_payment_stats(container: ServiceContainer = Depends(get_container)):
    """收入统计"""
    return (await container.payments.get_stats()).to_ui()


@router.get("/unpaid-bookings")
async def list_unpaid_bookings(container: ServiceContainer = Depends(get_container)):
    """未付款预订"""
    return to_ui_list(await container.payments.get_unpaid_bookings())


@router.get("/{payment_id}")
async def get_payment(payment_id: int, container: ServiceContainer = Depends(get_container)):
    """获取单条支付记录"""
    payment = await container.payments.get_by_id(payment_id)
    if payment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="支付记录不存在")
    return payment.to_ui()


@router.post("")
async def create_payment(data: PaymentCreate, container: ServiceContainer = Depends(get_container)):
    """登记支付"""
    return to_ui_or_none(await container.payments.create(data))


@router.put("/{payment_id}")
async def update_payment(
    payment_id: int,
    data: PaymentUpdate,
    container: ServiceContainer = Depends(get_container)
):
    """更新支付记录"""
    return to_ui_or_none(await container.payments.update(payment_id, data))


@router.delete("/{payment_id}")
async def delete_payment(payment_id: int, container: ServiceContainer = Depends(get_container)):
    """删除支付记录"""
    return {"success": await container.payments.delete(payment_id)}
