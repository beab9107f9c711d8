"""
仪表盘示例数据
KPI、通知、收入图表尚无后端表，使用固定示例数据
"""

KPI_METRICS = [
    {"Id": 1, "title": "Occupancy Rate", "value": 78.5, "unit": "%", "change": 3.2,
     "trend": "up", "icon": "Bed"},
    {"Id": 2, "title": "Average Daily Rate", "value": 189, "unit": "$", "change": 4.1,
     "trend": "up", "icon": "DollarSign"},
    {"Id": 3, "title": "RevPAR", "value": 148, "unit": "$", "change": -1.3,
     "trend": "down", "icon": "TrendingUp"},
    {"Id": 4, "title": "Check-ins Today", "value": 42, "unit": "guests", "change": 6.0,
     "trend": "up", "icon": "LogIn"},
    {"Id": 5, "title": "Check-outs Today", "value": 37, "unit": "guests", "change": -2.5,
     "trend": "down", "icon": "LogOut"},
    {"Id": 6, "title": "Guest Satisfaction", "value": 4.6, "unit": "rating", "change": 0.2,
     "trend": "up", "icon": "Star"},
    {"Id": 7, "title": "Open Work Orders", "value": 12, "unit": "orders", "change": 0,
     "trend": "neutral", "icon": "Wrench"},
    {"Id": 8, "title": "Rooms to Clean", "value": 18, "unit": "rooms", "change": -8.0,
     "trend": "down", "icon": "Sparkles"},
]

NOTIFICATIONS = [
    {"Id": 1, "title": "VIP Arrival", "message": "Suite 1201 guest arriving at 15:00",
     "type": "info", "priority": "high", "timestamp": "2024-03-15T09:30:00Z", "read": False},
    {"Id": 2, "title": "Maintenance Alert", "message": "HVAC fault reported on floor 4",
     "type": "warning", "priority": "high", "timestamp": "2024-03-15T08:45:00Z", "read": False},
    {"Id": 3, "title": "Overbooking Risk", "message": "Deluxe rooms at 98% for Friday",
     "type": "warning", "priority": "normal", "timestamp": "2024-03-15T07:10:00Z", "read": False},
    {"Id": 4, "title": "Payment Received", "message": "Group booking deposit confirmed",
     "type": "success", "priority": "normal", "timestamp": "2024-03-14T18:20:00Z", "read": False},
    {"Id": 5, "title": "Housekeeping Update", "message": "Floor 3 cleaning completed",
     "type": "success", "priority": "low", "timestamp": "2024-03-14T16:05:00Z", "read": True},
    {"Id": 6, "title": "Late Checkout", "message": "Room 508 requested checkout at 14:00",
     "type": "info", "priority": "normal", "timestamp": "2024-03-14T11:40:00Z", "read": False},
    {"Id": 7, "title": "Inventory Low", "message": "Minibar restock needed on floors 6-8",
     "type": "warning", "priority": "low", "timestamp": "2024-03-14T10:15:00Z", "read": True},
    {"Id": 8, "title": "Staff Shift Change", "message": "Night audit handover at 23:00",
     "type": "info", "priority": "low", "timestamp": "2024-03-13T22:30:00Z", "read": True},
    {"Id": 9, "title": "Review Posted", "message": "New 5-star review on booking site",
     "type": "success", "priority": "low", "timestamp": "2024-03-13T14:00:00Z", "read": True},
    {"Id": 10, "title": "Fire Drill", "message": "Scheduled drill Thursday 10:00",
     "type": "info", "priority": "normal", "timestamp": "2024-03-12T09:00:00Z", "read": True},
]

CHART_DATA = {
    "daily": {
        "title": "Daily Revenue",
        "data": [
            {"label": "Mon", "value": 12400},
            {"label": "Tue", "value": 11800},
            {"label": "Wed", "value": 13250},
            {"label": "Thu", "value": 14100},
            {"label": "Fri", "value": 18900},
            {"label": "Sat", "value": 21300},
            {"label": "Sun", "value": 16700},
        ],
        "total": 108450,
    },
    "weekly": {
        "title": "Weekly Revenue",
        "data": [
            {"label": "Week 1", "value": 96500},
            {"label": "Week 2", "value": 102300},
            {"label": "Week 3", "value": 99800},
            {"label": "Week 4", "value": 108450},
        ],
        "total": 407050,
    },
    "monthly": {
        "title": "Monthly Revenue",
        "data": [
            {"label": "Jan", "value": 385000},
            {"label": "Feb", "value": 362000},
            {"label": "Mar", "value": 407050},
        ],
        "total": 1154050,
    },
}
