"""
实体服务与仪表盘聚合
"""
from hotelops.services.base import CLIENT_UNAVAILABLE, RecordService
from hotelops.services.booking_service import BookingService
from hotelops.services.container import ServiceContainer
from hotelops.services.dashboard_service import DashboardService
from hotelops.services.housekeeping_service import HousekeepingService, TaskNotFoundError
from hotelops.services.maintenance_service import MaintenanceService
from hotelops.services.payment_service import PaymentService
from hotelops.services.room_service import RoomNotFoundError, RoomService
from hotelops.services.staff_service import StaffService

__all__ = [
    "CLIENT_UNAVAILABLE", "RecordService",
    "BookingService", "DashboardService", "HousekeepingService", "MaintenanceService",
    "PaymentService", "RoomService", "StaffService",
    "RoomNotFoundError", "TaskNotFoundError",
    "ServiceContainer",
]
