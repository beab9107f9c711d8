"""
支付服务测试
"""
import asyncio
from datetime import date

import pytest

from core.records import RecordResponse
from hotelops.models.schemas import DateRange, PaymentCreate, PaymentUpdate


@pytest.fixture
def sample_payments(record_client, sample_bookings):
    today = date.today().isoformat()
    return record_client.seed("payment_c", [
        {"amount_c": 660, "payment_method_c": "Credit Card", "payment_status_c": "Completed",
         "payment_date_c": "2024-03-01T15:00:00", "booking_id_c": 1},
        {"amount_c": 120, "payment_method_c": "Cash", "payment_status_c": "completed",
         "payment_date_c": f"{today}T09:30:00", "booking_id_c": 2},
        {"amount_c": 120, "payment_method_c": "", "payment_status_c": "Completed",
         "payment_date_c": "2024-02-21T12:00:00"},
        {"amount_c": 240, "payment_method_c": "Credit Card", "payment_status_c": "Pending",
         "payment_date_c": "2024-03-10T10:00:00", "booking_id_c": 2},
        {"amount_c": 90, "payment_method_c": "Credit Card", "payment_status_c": "Failed",
         "payment_date_c": "2024-03-11T10:00:00"},
    ])


class TestPayments:

    def test_get_all_newest_first(self, container, sample_payments):
        payments = asyncio.run(container.payments.get_all())
        assert [p.id for p in payments] == [5, 4, 3, 2, 1]
        assert payments[4].booking_id == 1
        assert payments[4].processed_at == "2024-03-01T15:00:00"

    def test_get_by_id(self, container, sample_payments):
        assert asyncio.run(container.payments.get_by_id(4)).amount == 240
        assert asyncio.run(container.payments.get_by_id(40)) is None

    def test_create(self, container, record_client, toast_channel):
        payment = asyncio.run(container.payments.create(PaymentCreate(
            amount="85.00", method="Cash", booking_id=2,
        )))
        assert payment.amount == 85.0
        assert payment.status == "Pending"
        assert record_client.rows("payment_c")[0]["payment_method_c"] == "Cash"
        assert toast_channel.messages() == ["Payment recorded successfully"]

    def test_update(self, container, sample_payments):
        payment = asyncio.run(container.payments.update(4, PaymentUpdate(status="Completed")))
        assert payment.status == "Completed"
        assert payment.amount == 240

    def test_delete(self, container, record_client, sample_payments):
        assert asyncio.run(container.payments.delete(5)) is True
        assert len(record_client.rows("payment_c")) == 4

    def test_delete_requires_results(self, container, record_client, toast_channel, monkeypatch):
        async def bare_success(table, params):
            return RecordResponse(success=True)

        monkeypatch.setattr(record_client, "delete_record", bare_success)
        assert asyncio.run(container.payments.delete(5)) is False
        assert toast_channel.messages() == []

    def test_unpaid_bookings(self, container, sample_bookings):
        bookings = asyncio.run(container.payments.get_unpaid_bookings())
        assert [b.guest_name for b in bookings] == ["Bob Chen", "Carla Ruiz"]
        assert bookings[0].total_amount == 240


class TestPaymentStats:

    def test_only_completed_payments_count_as_revenue(self, container, sample_payments):
        stats = asyncio.run(container.payments.get_stats())

        assert stats.total_revenue == 900
        assert stats.todays_revenue == 120
        assert stats.total_payments == 5
        assert stats.completed_payments == 3
        assert stats.pending_payments == 1
        assert stats.failed_payments == 1
        assert stats.by_method == {"Credit Card": 660, "Cash": 120, "Other": 120}

    def test_date_range_limits_payments(self, container, sample_payments):
        window = DateRange(start=date(2024, 3, 1), end=date(2024, 3, 31))
        stats = asyncio.run(container.payments.get_stats(window))

        assert stats.total_payments == 3
        assert stats.total_revenue == 660

    def test_stats_without_payments(self, container):
        stats = asyncio.run(container.payments.get_stats())
        assert stats.total_revenue == 0
        assert stats.by_method == {}
