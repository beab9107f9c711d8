# API Routers
from hotelops.routers import bookings, dashboard, housekeeping, maintenance, payments, rooms, staff, toasts

__all__ = ['bookings', 'dashboard', 'housekeeping', 'maintenance', 'payments', 'rooms', 'staff', 'toasts']
