"""
服务容器
显式持有 Record Client 和 Notifier，各服务在首次访问时创建
"""
import logging
import random
from functools import cached_property
from typing import Optional

from core.notification import Notifier
from core.records import RecordClient
from core.records.http import HttpRecordClient
from hotelops.config import Settings, get_settings
from hotelops.notification import InMemoryToastChannel, LoggingChannel
from hotelops.services.booking_service import BookingService
from hotelops.services.dashboard_service import DashboardService
from hotelops.services.housekeeping_service import HousekeepingService
from hotelops.services.maintenance_service import MaintenanceService
from hotelops.services.payment_service import PaymentService
from hotelops.services.room_service import RoomService
from hotelops.services.staff_service import StaffService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    服务容器

    使用方式：
        container = ServiceContainer.from_settings(get_settings())
        rooms = await container.rooms.get_all()
    """

    def __init__(self, client: Optional[RecordClient], notifier: Notifier,
                 settings: Optional[Settings] = None, rng: Optional[random.Random] = None):
        self.client = client
        self.notifier = notifier
        self.settings = settings or get_settings()
        self.rng = rng

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """根据配置创建客户端和通知渠道；后端未配置时客户端为 None"""
        client = None
        if settings.backend_configured:
            client = HttpRecordClient(
                base_url=settings.RECORD_API_URL,
                project_id=settings.PROJECT_ID,
                public_key=settings.PUBLIC_KEY,
                timeout=settings.REQUEST_TIMEOUT,
            )
        else:
            logger.warning("Record backend not configured; services will return empty results")

        notifier = Notifier([
            InMemoryToastChannel(maxlen=settings.TOAST_HISTORY),
            LoggingChannel(),
        ])
        return cls(client, notifier, settings)

    @property
    def toasts(self) -> Optional[InMemoryToastChannel]:
        return self.notifier.get_channel("toast")

    def _build(self, service_cls, **kwargs):
        logger.debug(f"Creating {service_cls.__name__}")
        return service_cls(self.client, self.notifier, settings=self.settings, **kwargs)

    @cached_property
    def bookings(self) -> BookingService:
        return self._build(BookingService)

    @cached_property
    def rooms(self) -> RoomService:
        return self._build(RoomService)

    @cached_property
    def staff(self) -> StaffService:
        return self._build(StaffService)

    @cached_property
    def housekeeping(self) -> HousekeepingService:
        return self._build(HousekeepingService, room_service=self.rooms, staff_service=self.staff)

    @cached_property
    def maintenance(self) -> MaintenanceService:
        return self._build(MaintenanceService)

    @cached_property
    def payments(self) -> PaymentService:
        return self._build(PaymentService)

    @cached_property
    def dashboard(self) -> DashboardService:
        return self._build(DashboardService, services=self, rng=self.rng)

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()
