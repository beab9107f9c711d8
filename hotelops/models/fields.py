"""
后端表字段映射
每张表一个 FieldMap：UI 属性名 <-> 后端列名，缺省值与编解码
"""
from core.records.mapping import (
    FieldMap, FieldSpec,
    decode_json_list, encode_json_list, lookup_id, lookup_name, to_bool, to_float, to_int,
)

BOOKING_TABLE = "booking_c"
ROOM_TABLE = "room_c"
STAFF_TABLE = "staff_c"
WORK_ORDER_TABLE = "work_order_c"
EQUIPMENT_TABLE = "equipment_c"
VENDOR_TABLE = "vendor_c"
PAYMENT_TABLE = "payment_c"
ACTIVITY_TABLE = "activity_c"


def _hours_to_minutes(value):
    hours = to_float(value)
    return hours * 60 if hours else None


def _minutes_to_hours(value):
    return None if value is None else round(float(value) / 60, 4)


# ============== 预订 ==============

BOOKING_FIELDS = FieldMap(BOOKING_TABLE, [
    FieldSpec("guest_name", "guest_name_c", default=""),
    FieldSpec("room_number", "room_number_c", default=""),
    FieldSpec("check_in_date", "check_in_date_c", default=""),
    FieldSpec("check_out_date", "check_out_date_c", default=""),
    FieldSpec("status", "status_c", default=""),
    FieldSpec("total_amount", "total_amount_c", default=0, decode=to_float),
    FieldSpec("special_requests", "special_requests_c", default=""),
    FieldSpec("payment_status", "payment_status_c", default=""),
])


# ============== 房间 ==============

ROOM_FIELDS = FieldMap(ROOM_TABLE, [
    FieldSpec("name", "Name"),
    FieldSpec("room_number", "room_number_c"),
    FieldSpec("floor", "floor_c", decode=to_int),
    FieldSpec("room_type", "room_type_c"),
    FieldSpec("status", "status_c"),
    FieldSpec("nightly_rate", "nightly_rate_c", default=0, decode=to_float),
    FieldSpec("guest_name", "guest_name_c"),
    FieldSpec("checkin_time", "checkin_time_c"),
    FieldSpec("checkout_time", "checkout_time_c"),
    FieldSpec("blocked", "blocked_c", default=False, decode=to_bool),
    FieldSpec("block_reason", "block_reason_c"),
    FieldSpec("last_updated", "last_updated_c"),
    FieldSpec("notes", "notes_c", default_factory=list,
              decode=decode_json_list, encode=encode_json_list),
    FieldSpec("status_history", "status_history_c", default_factory=list,
              decode=decode_json_list, encode=encode_json_list),
])


# ============== 员工 ==============

STAFF_FIELDS = FieldMap(STAFF_TABLE, [
    FieldSpec("name", "name_c"),
    FieldSpec("email", "email_c"),
    FieldSpec("phone", "phone_c"),
    FieldSpec("role", "role_c"),
    FieldSpec("shift", "shift_c"),
    FieldSpec("status", "status_c", default="Active"),
    FieldSpec("hire_date", "hireDate_c"),
    FieldSpec("hours_worked", "hours_worked_c", default=0, decode=to_float),
    FieldSpec("last_activity", "last_activity_c"),
    FieldSpec("active_assignments", "active_assignments_c", default=0, decode=to_int),
    FieldSpec("completed_today", "completed_today_c", default=0, decode=to_int),
])


# ============== 清洁任务（work_order_c, category = housekeeping） ==============

HOUSEKEEPING_TASK_FIELDS = FieldMap(WORK_ORDER_TABLE, [
    FieldSpec("title", "title_c", default=""),
    FieldSpec("description", "description_c", default=""),
    FieldSpec("priority", "priority_c", default="medium"),
    FieldSpec("status", "status_c", default="open"),
    FieldSpec("category", "category_c", default="housekeeping"),
    FieldSpec("room_number", "room_number_c"),
    FieldSpec("room_id", "room_id_c", decode=lookup_id, encode=to_int),
    FieldSpec("assigned_to", "assigned_to_c", decode=lookup_id, encode=to_int),
    FieldSpec("assigned_staff", "assigned_name_c"),
    FieldSpec("estimated_time", "estimated_hours_c", default=30,
              decode=_hours_to_minutes, encode=_minutes_to_hours),
    FieldSpec("actual_time", "actual_hours_c",
              decode=_hours_to_minutes, encode=_minutes_to_hours),
    FieldSpec("start_time", "started_at_c"),
    FieldSpec("completed_time", "completed_at_c"),
    FieldSpec("created_at", "created_at_c"),
    FieldSpec("created_by", "reported_by_c"),
    FieldSpec("updated_at", "updated_at_c"),
])


# ============== 维修工单（work_order_c, category != housekeeping） ==============

WORK_ORDER_FIELDS = FieldMap(WORK_ORDER_TABLE, [
    FieldSpec("title", "title_c", default=""),
    FieldSpec("description", "description_c", default=""),
    FieldSpec("priority", "priority_c", default="medium"),
    FieldSpec("status", "status_c", default="open"),
    FieldSpec("room_number", "room_number_c"),
    FieldSpec("assigned_to", "assigned_to_c", decode=lookup_id, encode=to_int),
    FieldSpec("assigned_name", "assigned_to_c", default="Unassigned",
              decode=lookup_name, writable=False),
    FieldSpec("estimated_hours", "estimated_hours_c", decode=to_float),
    FieldSpec("category", "category_c", default=""),
    FieldSpec("created_at", "created_at_c"),
    FieldSpec("updated_at", "updated_at_c"),
    FieldSpec("completed_at", "completed_at_c"),
    FieldSpec("notes", "notes_c", default_factory=list,
              decode=decode_json_list, encode=encode_json_list),
])


EQUIPMENT_FIELDS = FieldMap(EQUIPMENT_TABLE, [
    FieldSpec("name", "name_c", default=""),
    FieldSpec("type", "type_c", default=""),
    FieldSpec("status", "status_c", default=""),
    FieldSpec("last_maintenance", "lastMaintenance_c"),
    FieldSpec("next_maintenance", "nextMaintenance_c"),
])


VENDOR_FIELDS = FieldMap(VENDOR_TABLE, [
    FieldSpec("name", "name_c", default=""),
    FieldSpec("service", "service_c", default=""),
    FieldSpec("contact", "contact_c", default=""),
    FieldSpec("phone", "phone_c", default=""),
    FieldSpec("email", "email_c", default=""),
])


# ============== 支付 ==============

PAYMENT_FIELDS = FieldMap(PAYMENT_TABLE, [
    FieldSpec("amount", "amount_c", default=0, decode=to_float),
    FieldSpec("method", "payment_method_c", default=""),
    FieldSpec("status", "payment_status_c", default=""),
    FieldSpec("transaction_id", "transaction_id_c", default=""),
    FieldSpec("processed_at", "payment_date_c"),
    FieldSpec("notes", "notes_c", default=""),
    FieldSpec("booking_id", "booking_id_c", decode=lookup_id, encode=to_int),
])


# ============== 动态 ==============

ACTIVITY_FIELDS = FieldMap(ACTIVITY_TABLE, [
    FieldSpec("type", "type_c", default=""),
    FieldSpec("message", "message_c", default=""),
    FieldSpec("timestamp", "timestamp_c"),
    FieldSpec("user", "user_c"),
    FieldSpec("details", "details_c"),
])
