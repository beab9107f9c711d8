"""
Pydantic 模式定义
属性名为 snake_case，序列化（by_alias=True）后为 UI 使用的 camelCase 键
"""
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _coerce_float(value: Any) -> float:
    """等价于 parseFloat(x) || 0：无法解析时取 0"""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class UIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_ui(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ============== 预订 Schemas ==============

class Booking(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    guest_name: str = ""
    room_number: str = ""
    check_in_date: str = ""
    check_out_date: str = ""
    status: str = ""
    total_amount: float = 0
    special_requests: str = ""
    payment_status: str = ""


class BookingCreate(UIModel):
    guest_name: str = ""
    room_number: str = ""
    check_in_date: str = ""
    check_out_date: str = ""
    status: str = "Confirmed"
    total_amount: float = 0
    special_requests: str = ""
    payment_status: str = "Unpaid"

    @field_validator("total_amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return _coerce_float(value)


class BookingUpdate(UIModel):
    guest_name: Optional[str] = None
    room_number: Optional[str] = None
    check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    status: Optional[str] = None
    total_amount: Optional[float] = None
    special_requests: Optional[str] = None
    payment_status: Optional[str] = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return None if value is None else _coerce_float(value)


class BookingStatusUpdate(UIModel):
    status: str


# ============== 房间 Schemas ==============

class StatusHistoryEntry(UIModel):
    status: str
    timestamp: str = ""
    changed_from: Optional[str] = None
    changed_by: str = ""
    note: Optional[str] = None
    guest_name: Optional[str] = None


class RoomNote(UIModel):
    id: int
    content: str
    timestamp: str = ""
    added_by: str = ""
    type: str = "General"


class Room(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    name: Optional[str] = None
    room_number: Optional[str] = None
    floor: Optional[int] = None
    room_type: Optional[str] = None
    status: Optional[str] = None
    nightly_rate: float = 0
    guest_name: Optional[str] = None
    checkin_time: Optional[str] = None
    checkout_time: Optional[str] = None
    blocked: bool = False
    block_reason: Optional[str] = None
    last_updated: Optional[str] = None
    notes: List[RoomNote] = Field(default_factory=list)
    status_history: List[StatusHistoryEntry] = Field(default_factory=list)


class RoomCreate(UIModel):
    room_number: str
    name: Optional[str] = None
    floor: Optional[int] = None
    room_type: Optional[str] = None
    status: str = "Available"
    nightly_rate: float = 0


class RoomUpdate(UIModel):
    name: Optional[str] = None
    room_number: Optional[str] = None
    floor: Optional[int] = None
    room_type: Optional[str] = None
    nightly_rate: Optional[float] = None
    guest_name: Optional[str] = None
    checkin_time: Optional[str] = None
    checkout_time: Optional[str] = None


class RoomStatusUpdate(UIModel):
    status: str


class GuestAssignment(UIModel):
    guest_name: str = Field(..., min_length=1)
    checkin_time: Optional[str] = None
    checkout_time: Optional[str] = None


class RoomBlock(UIModel):
    reason: str = ""


class BulkRoomStatusUpdate(UIModel):
    room_ids: List[int]
    status: str


class BulkRoomBlock(UIModel):
    room_ids: List[int]
    reason: str = ""


class RoomNoteCreate(UIModel):
    content: str = Field(..., min_length=1)


class RoomStats(UIModel):
    total: int = 0
    available: int = 0
    occupied: int = 0
    maintenance: int = 0
    cleaning: int = 0
    occupancy_rate: float = 0.0


# ============== 员工 Schemas ==============

class ScheduleDay(UIModel):
    day: str
    is_workday: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    hours: int = 0


class Staff(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    shift: Optional[str] = None
    status: str = "Active"
    hire_date: Optional[str] = None
    hours_worked: float = 0
    last_activity: Optional[str] = None
    active_assignments: int = 0
    completed_today: int = 0
    department: str = "General"
    weekly_hours: float = 0
    schedule: List[ScheduleDay] = Field(default_factory=list)


class StaffCreate(UIModel):
    name: str = Field(..., min_length=1)
    email: str = ""
    phone: str = ""
    role: str = ""
    shift: str = "Day"
    status: str = "Active"
    hire_date: Optional[str] = None


class StaffUpdate(UIModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    shift: Optional[str] = None
    status: Optional[str] = None
    hire_date: Optional[str] = None
    hours_worked: Optional[float] = None


class StaffPerformance(UIModel):
    staff_id: Optional[int] = None
    name: Optional[str] = None
    department: str = "General"
    hours_worked: float = 0
    weekly_hours: float = 0
    productivity: float = 0


# ============== 清洁任务 Schemas ==============

class HousekeepingTask(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    title: str = ""
    description: str = ""
    priority: str = "medium"
    status: str = "open"
    category: str = "housekeeping"
    room_number: Optional[str] = None
    room_id: Optional[int] = None
    assigned_to: Optional[int] = None
    assigned_staff: Optional[str] = None
    estimated_time: float = 30
    actual_time: Optional[float] = None
    start_time: Optional[str] = None
    completed_time: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    task_type: str = "standard_cleaning"


class HousekeepingTaskCreate(UIModel):
    title: Optional[str] = None
    description: str = ""
    priority: str = "medium"
    room_number: Optional[str] = None
    room_id: Optional[int] = None
    estimated_time: Optional[float] = None


class TaskStatusUpdate(UIModel):
    status: str


class TaskAssignment(UIModel):
    staff_id: int


class BulkAssignment(UIModel):
    room_ids: List[int]
    staff_id: int
    special_instructions: Optional[str] = None
    supplies: List[str] = Field(default_factory=list)
    priority: str = "medium"


class StaffAssignmentStats(UIModel):
    staff_id: Optional[int] = None
    name: Optional[str] = None
    status: str = ""
    active_assignments: int = 0
    completed_today: int = 0


class HousekeepingStats(UIModel):
    total_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completed_today: int = 0
    average_time: int = 0
    staff_stats: List[StaffAssignmentStats] = Field(default_factory=list)


# ============== 维修工单 Schemas ==============

class WorkOrder(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    title: str = ""
    description: str = ""
    priority: str = "medium"
    status: str = "open"
    room_number: Optional[str] = None
    assigned_to: Optional[int] = None
    assigned_name: str = "Unassigned"
    estimated_hours: Optional[float] = None
    category: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    completed_at: Optional[str] = None
    notes: List[Any] = Field(default_factory=list)


class WorkOrderCreate(UIModel):
    title: str = ""
    description: str = ""
    priority: str = "medium"
    status: str = "open"
    room_number: Optional[str] = None
    assigned_to: Optional[int] = None
    estimated_hours: Optional[float] = None
    category: str = ""


class WorkOrderUpdate(UIModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    room_number: Optional[str] = None
    assigned_to: Optional[int] = None
    estimated_hours: Optional[float] = None
    category: Optional[str] = None


class MaintenanceStats(UIModel):
    total: int = 0
    active: int = 0
    open: int = 0
    in_progress: int = 0
    on_hold: int = 0
    completed: int = 0
    high_priority: int = 0
    avg_completion_time: float = 0.0


class Equipment(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    name: str = ""
    type: str = ""
    status: str = ""
    last_maintenance: Optional[str] = None
    next_maintenance: Optional[str] = None


class Vendor(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    name: str = ""
    service: str = ""
    contact: str = ""
    phone: str = ""
    email: str = ""


# ============== 支付 Schemas ==============

class Payment(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    amount: float = 0
    method: str = ""
    status: str = ""
    transaction_id: str = ""
    processed_at: Optional[str] = None
    notes: str = ""
    booking_id: Optional[int] = None


class PaymentCreate(UIModel):
    amount: float = 0
    method: str = ""
    status: str = "Pending"
    transaction_id: str = ""
    processed_at: Optional[str] = None
    notes: str = ""
    booking_id: Optional[int] = None

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return _coerce_float(value)


class PaymentUpdate(UIModel):
    amount: Optional[float] = None
    method: Optional[str] = None
    status: Optional[str] = None
    transaction_id: Optional[str] = None
    processed_at: Optional[str] = None
    notes: Optional[str] = None
    booking_id: Optional[int] = None


class PaymentStats(UIModel):
    total_revenue: float = 0
    todays_revenue: float = 0
    total_payments: int = 0
    completed_payments: int = 0
    pending_payments: int = 0
    failed_payments: int = 0
    by_method: Dict[str, float] = Field(default_factory=dict)


# ============== 仪表盘 Schemas ==============

class KPIMetric(UIModel):
    id: int = Field(alias="Id")
    title: str
    value: float
    unit: str = ""
    change: float = 0
    trend: str = "neutral"
    icon: Optional[str] = None
    last_updated: Optional[str] = None


class Activity(UIModel):
    id: Optional[int] = Field(default=None, alias="Id")
    type: str = ""
    message: str = ""
    timestamp: Optional[str] = None
    user: Optional[str] = None
    details: Optional[str] = None


class DashboardNotification(UIModel):
    id: int = Field(alias="Id")
    title: str
    message: str = ""
    type: str = "info"
    priority: str = "normal"
    timestamp: str
    read: bool = False


class ChartPoint(UIModel):
    label: str
    value: float


class ChartSeries(UIModel):
    title: str = ""
    data: List[ChartPoint] = Field(default_factory=list)
    total: float = 0


class ChartData(UIModel):
    daily: ChartSeries
    weekly: ChartSeries
    monthly: ChartSeries


class DashboardOverview(UIModel):
    kpi_metrics: List[KPIMetric] = Field(default_factory=list)
    activities: List[Activity] = Field(default_factory=list)
    notifications: List[DashboardNotification] = Field(default_factory=list)
    chart_data: Optional[ChartData] = None
    payment_revenue: float = 0
    last_updated: str


class DateRange(UIModel):
    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, value: Optional[str]) -> bool:
        """value 为 ISO 日期/时间字符串；无法解析的值视为不在范围内"""
        if self.start is None and self.end is None:
            return True
        if not value:
            return False
        try:
            day = date.fromisoformat(str(value)[:10])
        except ValueError:
            return False
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


class ReportFilters(UIModel):
    status: Optional[str] = None


class ReportRequest(UIModel):
    metrics: List[str]
    date_range: Optional[DateRange] = None
    filters: Optional[ReportFilters] = None


class ReportRow(UIModel):
    type: str
    id: Optional[int] = None
    guest: Optional[str] = None
    room: Optional[str] = None
    amount: float = 0
    method: Optional[str] = None
    status: Optional[str] = None
    date: Optional[str] = None
