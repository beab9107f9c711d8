"""
跨服务的失败兜底测试
后端失败时列表查询返回 []，被拒绝的更新返回 None
"""
import asyncio

import pytest

from hotelops.models.schemas import BookingUpdate, PaymentUpdate, StaffUpdate, WorkOrderUpdate

LIST_QUERIES = {
    "bookings": lambda c: c.bookings.get_all(),
    "rooms": lambda c: c.rooms.get_all(),
    "staff": lambda c: c.staff.get_all(),
    "housekeeping tasks": lambda c: c.housekeeping.get_all_tasks(),
    "housekeeping staff": lambda c: c.housekeeping.get_all_staff(),
    "work orders": lambda c: c.maintenance.get_all_work_orders(),
    "equipment": lambda c: c.maintenance.get_all_equipment(),
    "vendors": lambda c: c.maintenance.get_all_vendors(),
    "payments": lambda c: c.payments.get_all(),
    "activities": lambda c: c.dashboard.get_activities(),
}


@pytest.fixture
def seeded(record_client, sample_rooms, sample_staff, sample_bookings):
    record_client.seed("work_order_c", [
        {"title_c": "Broken AC", "category_c": "hvac", "status_c": "open", "priority_c": "high"},
        {"title_c": "Turn down 101", "category_c": "housekeeping", "status_c": "open"},
    ])
    record_client.seed("payment_c", [
        {"amount_c": 120, "payment_method_c": "Cash", "payment_status_c": "Completed", "booking_id_c": 1},
    ])
    record_client.seed("equipment_c", [{"name_c": "Boiler"}])
    record_client.seed("vendor_c", [{"name_c": "CoolAir Ltd"}])
    record_client.seed("activity_c", [{"message_c": "Room 101 cleaned", "timestamp_c": "2024-03-01T09:00:00"}])
    return record_client


class TestListFetchFailure:

    @pytest.mark.parametrize("query", LIST_QUERIES.values(), ids=list(LIST_QUERIES))
    def test_returns_rows_when_backend_healthy(self, container, seeded, query):
        assert len(asyncio.run(query(container))) > 0

    @pytest.mark.parametrize("query", LIST_QUERIES.values(), ids=list(LIST_QUERIES))
    def test_returns_empty_list_on_fetch_failure(self, container, seeded, toast_channel, query):
        seeded.fail_next("fetch")

        assert asyncio.run(query(container)) == []
        assert "Backend unavailable" in toast_channel.messages()


class TestRejectedUpdate:
    """更新结果中的失败记录不会被当作成功返回"""

    @pytest.mark.parametrize("table,update", [
        ("booking_c", lambda c: c.bookings.update(1, BookingUpdate(special_requests="Late arrival"))),
        ("staff_c", lambda c: c.staff.update(1, StaffUpdate(phone="555-0199"))),
        ("payment_c", lambda c: c.payments.update(1, PaymentUpdate(status="Refunded"))),
        ("work_order_c", lambda c: c.maintenance.update_work_order(1, WorkOrderUpdate(priority="low"))),
    ], ids=["booking", "staff", "payment", "work order"])
    def test_rejected_record_returns_none(self, container, seeded, toast_channel, table, update):
        before = seeded.rows(table)
        seeded.reject_when("update", lambda record: True, message="Validation failed", table=table)

        assert asyncio.run(update(container)) is None
        assert toast_channel.messages() == ["Validation failed"]
        assert seeded.rows(table) == before
