"""
路由依赖
"""
from fastapi import Request

from hotelops.services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """获取应用级服务容器（create_app 时放入 app.state）"""
    return request.app.state.container


def to_ui_list(items):
    return [item.to_ui() for item in items]


def to_ui_or_none(item):
    return item.to_ui() if item is not None else None
