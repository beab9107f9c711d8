"""
维修服务测试
"""
import asyncio

import pytest

from hotelops.models.schemas import WorkOrderCreate, WorkOrderUpdate


@pytest.fixture
def sample_orders(record_client, sample_staff):
    return record_client.seed("work_order_c", [
        {"title_c": "Leaking faucet", "category_c": "plumbing", "priority_c": "high",
         "status_c": "open", "room_number_c": "101", "created_at_c": "2024-03-01T08:00:00"},
        {"title_c": "AC not cooling", "category_c": "hvac", "priority_c": "medium",
         "status_c": "in_progress", "assigned_to_c": 2, "created_at_c": "2024-03-02T08:00:00"},
        {"title_c": "Replace bulb", "category_c": "electrical", "priority_c": "low",
         "status_c": "completed", "created_at_c": "2024-03-03T08:00:00",
         "completed_at_c": "2024-03-03T10:00:00"},
        {"title_c": "Door lock", "category_c": "security", "priority_c": "high",
         "status_c": "completed", "created_at_c": "2024-03-04T08:00:00",
         "completed_at_c": "2024-03-04T13:00:00"},
        {"title_c": "Turn down 101", "category_c": "housekeeping", "status_c": "open",
         "created_at_c": "2024-03-05T08:00:00"},
    ])


class TestWorkOrders:

    def test_get_all_excludes_housekeeping(self, container, sample_orders):
        orders = asyncio.run(container.maintenance.get_all_work_orders())
        assert [o.title for o in orders] == ["Door lock", "Replace bulb", "AC not cooling", "Leaking faucet"]

    def test_assigned_name_from_lookup(self, container, sample_orders):
        orders = asyncio.run(container.maintenance.get_all_work_orders())
        ac = next(o for o in orders if o.title == "AC not cooling")
        faucet = next(o for o in orders if o.title == "Leaking faucet")
        assert (ac.assigned_to, ac.assigned_name) == (2, "Tom Baker")
        assert (faucet.assigned_to, faucet.assigned_name) == (None, "Unassigned")

    def test_get_by_id_missing_notifies(self, container, sample_orders, toast_channel):
        assert asyncio.run(container.maintenance.get_work_order_by_id(77)) is None
        assert len(toast_channel.messages()) == 1

    def test_create_sets_timestamps(self, container, toast_channel):
        order = asyncio.run(container.maintenance.create_work_order(WorkOrderCreate(
            title="Broken window", category="structural", priority="high", assigned_to=None,
        )))
        assert order.status == "open"
        assert order.created_at
        assert order.created_at == order.updated_at
        assert order.notes == []
        assert toast_channel.messages() == ["Work order created successfully"]

    def test_update_partial_and_touch(self, container, record_client, sample_orders):
        order = asyncio.run(container.maintenance.update_work_order(1, WorkOrderUpdate(priority="low")))

        assert order.priority == "low"
        assert order.title == "Leaking faucet"
        assert order.updated_at
        assert order.completed_at is None

    def test_status_completed_stamps_completion(self, container, sample_orders):
        order = asyncio.run(container.maintenance.update_work_order_status(2, "completed"))
        assert order.status == "completed"
        assert order.completed_at

    def test_delete(self, container, record_client, sample_orders):
        assert asyncio.run(container.maintenance.delete_work_order(3)) is True
        assert len(record_client.rows("work_order_c")) == 4


class TestMaintenanceStats:

    def test_stats(self, container, sample_orders):
        stats = asyncio.run(container.maintenance.get_maintenance_stats())

        assert stats.total == 4
        assert stats.active == 2
        assert stats.open == 1
        assert stats.in_progress == 1
        assert stats.completed == 2
        assert stats.high_priority == 2
        assert stats.avg_completion_time == 3.5

    def test_stats_without_completed_orders(self, container, record_client):
        record_client.seed("work_order_c", [
            {"title_c": "Paint hallway", "category_c": "general", "status_c": "on_hold"},
        ])
        stats = asyncio.run(container.maintenance.get_maintenance_stats())
        assert stats.on_hold == 1
        assert stats.active == 0
        assert stats.avg_completion_time == 0.0

    def test_stats_backend_failure(self, container, record_client):
        record_client.fail_next("fetch")
        stats = asyncio.run(container.maintenance.get_maintenance_stats())
        assert stats.total == 0


class TestEquipmentAndVendors:

    def test_equipment(self, container, record_client):
        record_client.seed("equipment_c", [
            {"name_c": "Boiler", "type_c": "HVAC", "status_c": "Operational",
             "lastMaintenance_c": "2024-01-15",
             "nextMaintenance_c": "2024-06-01"},
        ])
        equipment = asyncio.run(container.maintenance.get_all_equipment())
        assert equipment[0].name == "Boiler"
        assert equipment[0].last_maintenance == "2024-01-15"
        assert equipment[0].next_maintenance == "2024-06-01"

    def test_vendors(self, container, record_client):
        record_client.seed("vendor_c", [
            {"name_c": "CoolAir Ltd", "service_c": "HVAC", "phone_c": "555-0101"},
        ])
        vendors = asyncio.run(container.maintenance.get_all_vendors())
        assert vendors[0].service == "HVAC"
        assert vendors[0].email == ""

    def test_vendors_offline(self, offline_container, toast_channel):
        assert asyncio.run(offline_container.maintenance.get_all_vendors()) == []
        assert toast_channel.messages() == ["Database connection not available"]
