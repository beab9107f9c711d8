# Models
from hotelops.models.enums import (
    BookingStatus, HOUSEKEEPING_CATEGORY, PaymentStatus, RoomStatus, TaskPriority, TaskStatus,
)
from hotelops.models.schemas import (
    Booking, HousekeepingTask, Payment, Room, Staff, WorkOrder,
)

__all__ = [
    'BookingStatus', 'HOUSEKEEPING_CATEGORY', 'PaymentStatus', 'RoomStatus', 'TaskPriority', 'TaskStatus',
    'Booking', 'HousekeepingTask', 'Payment', 'Room', 'Staff', 'WorkOrder',
]
