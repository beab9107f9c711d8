"""
HotelOps 主应用入口
酒店运营数据访问服务的 HTTP 接口
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotelops import __version__
from hotelops.config import Settings, get_settings
from hotelops.routers import bookings, dashboard, housekeeping, maintenance, payments, rooms, staff, toasts
from hotelops.services.container import ServiceContainer

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Setup logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(settings: Optional[Settings] = None,
               container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    创建应用

    Args:
        settings: 应用配置，缺省读取环境变量
        container: 服务容器，缺省按配置创建（测试时注入）
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)
    container = container or ServiceContainer.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期：关闭时释放 Record Client"""
        logger.info(f"{settings.APP_NAME} started (backend configured: {settings.backend_configured})")
        yield
        await container.aclose()

    app = FastAPI(
        title=f"{settings.APP_NAME} - 酒店运营服务",
        description="酒店预订、房间、员工、清洁、维修、支付与仪表盘数据接口",
        version=__version__,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(bookings.router)
    app.include_router(rooms.router)
    app.include_router(staff.router)
    app.include_router(housekeeping.router)
    app.include_router(maintenance.router)
    app.include_router(payments.router)
    app.include_router(dashboard.router)
    app.include_router(toasts.router)

    @app.get("/")
    def root():
        """根路径"""
        return {
            "name": settings.APP_NAME,
            "version": __version__,
            "description": "酒店运营数据访问服务",
        }

    @app.get("/health")
    def health_check():
        """健康检查"""
        return {"status": "healthy", "backend": settings.backend_configured}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
