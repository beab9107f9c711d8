"""
枚举定义
取值即后端存储的字符串
"""
from enum import Enum


class RoomStatus(str, Enum):
    """房间状态"""
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    CLEANING = "Cleaning"
    MAINTENANCE = "Maintenance"
    OUT_OF_ORDER = "Out of Order"


class BookingStatus(str, Enum):
    """预订状态"""
    CONFIRMED = "Confirmed"
    CHECKED_IN = "Checked In"
    CHECKED_OUT = "Checked Out"
    CANCELLED = "Cancelled"
    PENDING = "Pending"


class TaskStatus(str, Enum):
    """工单 / 清洁任务状态"""
    OPEN = "open"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PaymentStatus(str, Enum):
    """支付状态"""
    COMPLETED = "Completed"
    PENDING = "Pending"
    FAILED = "Failed"
    REFUNDED = "Refunded"


HOUSEKEEPING_CATEGORY = "housekeeping"
