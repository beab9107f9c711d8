"""
UI toast 路由
UI 轮询取走服务层产生的提示
"""
from fastapi import APIRouter, Depends

from hotelops.dependencies import get_container
from hotelops.services.container import ServiceContainer

router = APIRouter(prefix="/toasts", tags=["通知"])


@router.get("")
async def drain_toasts(container: ServiceContainer = Depends(get_container)):
    """取走全部待显示的 toast"""
    channel = container.toasts
    if channel is None:
        return []
    return [toast.to_dict() for toast in channel.drain()]
