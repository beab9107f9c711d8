"""
预订服务测试
"""
import asyncio

from hotelops.models.schemas import BookingCreate, BookingUpdate
from hotelops.services import BookingService


class TestBookingQueries:

    def test_get_all_orders_by_check_in_desc(self, container, sample_bookings):
        bookings = asyncio.run(container.bookings.get_all())
        assert [b.guest_name for b in bookings] == ["Bob Chen", "Alice Martin", "Carla Ruiz"]
        assert bookings[0].total_amount == 240.0

    def test_get_all_filters_by_status(self, container, sample_bookings):
        bookings = asyncio.run(container.bookings.get_all(status="Confirmed"))
        assert [b.guest_name for b in bookings] == ["Bob Chen"]

    def test_get_all_backend_failure_returns_empty(self, container, record_client, toast_channel):
        record_client.fail_next("fetch", "Table booking_c is locked")
        assert asyncio.run(container.bookings.get_all()) == []
        assert toast_channel.messages() == ["Table booking_c is locked"]

    def test_get_all_unexpected_error(self, container, record_client, toast_channel, monkeypatch):
        async def explode(*args, **kwargs):
            raise RuntimeError("socket closed")

        monkeypatch.setattr(record_client, "fetch_records", explode)
        assert asyncio.run(container.bookings.get_all()) == []
        assert toast_channel.messages() == ["Failed to fetch bookings"]

    def test_get_by_id_missing_returns_none_quietly(self, container, sample_bookings, toast_channel):
        assert asyncio.run(container.bookings.get_by_id(99)) is None
        assert toast_channel.messages() == []

    def test_offline_service(self, offline_container, toast_channel):
        assert asyncio.run(offline_container.bookings.get_all()) == []
        assert toast_channel.messages() == ["Database connection not available"]

    def test_available_rooms(self, container, sample_rooms):
        rooms = asyncio.run(container.bookings.get_available_rooms())
        assert sorted(r.room_number for r in rooms) == ["101", "102"]
        assert all(r.status == "Available" for r in rooms)


class TestBookingWrites:

    def test_create_single(self, container, record_client, toast_channel):
        created = asyncio.run(container.bookings.create(BookingCreate(
            guest_name="Dana Kim", room_number="102", check_in_date="2024-04-01",
            check_out_date="2024-04-03", total_amount="360.50",
        )))

        assert len(created) == 1
        assert created[0].id == 1
        assert created[0].total_amount == 360.5
        assert created[0].payment_status == "Unpaid"
        assert record_client.rows("booking_c")[0]["status_c"] == "Confirmed"
        assert toast_channel.messages() == ["1 booking(s) created successfully"]

    def test_create_partial_failure_returns_successes(self, container, record_client, toast_channel):
        record_client.reject_when("create", lambda r: r.get("guest_name_c") == "", "Guest name is required")
        created = asyncio.run(container.bookings.create([
            BookingCreate(guest_name="Dana Kim", room_number="102"),
            BookingCreate(guest_name="", room_number="101"),
        ]))

        assert [b.guest_name for b in created] == ["Dana Kim"]
        assert toast_channel.messages() == [
            "Guest name is required",
            "1 booking(s) created successfully",
        ]

    def test_invalid_amount_parses_to_zero(self):
        assert BookingCreate(total_amount="n/a").total_amount == 0.0

    def test_update_writes_only_given_fields(self, container, record_client, sample_bookings):
        updated = asyncio.run(container.bookings.update(2, BookingUpdate(status="Checked In")))

        assert updated.status == "Checked In"
        assert updated.guest_name == "Bob Chen"
        assert record_client.rows("booking_c")[1]["total_amount_c"] == 240

    def test_update_missing_returns_none(self, container, sample_bookings, toast_channel):
        assert asyncio.run(container.bookings.update(42, BookingUpdate(status="Cancelled"))) is None
        assert "42" in toast_channel.messages()[0]

    def test_update_status(self, container, sample_bookings, toast_channel):
        booking = asyncio.run(container.bookings.update_status(1, "Checked Out"))
        assert booking.status == "Checked Out"
        assert toast_channel.messages() == ["Booking status updated successfully"]

    def test_delete_many(self, container, record_client, sample_bookings):
        assert asyncio.run(container.bookings.delete([1, 3])) is True
        assert [r["Id"] for r in record_client.rows("booking_c")] == [2]

    def test_delete_with_missing_id_is_false(self, container, sample_bookings):
        assert asyncio.run(container.bookings.delete([1, 77])) is False

    def test_service_uses_injected_settings(self, record_client, notifier, settings):
        service = BookingService(record_client, notifier, settings)
        assert service.acting_user == "Front Desk"
        assert service.table == "booking_c"
