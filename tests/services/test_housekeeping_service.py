"""
清洁任务服务测试
"""
import asyncio
from datetime import date, timedelta

import pytest

from core.records import RecordResponse
from hotelops.models.schemas import BulkAssignment, HousekeepingTaskCreate
from hotelops.services import TaskNotFoundError


@pytest.fixture
def sample_tasks(record_client, sample_staff):
    today = date.today().isoformat()
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    return record_client.seed("work_order_c", [
        {"title_c": "Turn down 101", "category_c": "housekeeping", "status_c": "open",
         "created_at_c": "2024-03-01T09:00:00"},
        {"title_c": "Deep clean 102", "category_c": "housekeeping", "status_c": "in_progress",
         "assigned_to_c": 1, "created_at_c": "2024-03-02T09:00:00"},
        {"title_c": "Refresh 201", "category_c": "housekeeping", "status_c": "completed",
         "assigned_to_c": 1, "actual_hours_c": 0.5, "completed_at_c": f"{today}T10:00:00",
         "created_at_c": "2024-03-03T09:00:00"},
        {"title_c": "Refresh 202", "category_c": "housekeeping", "status_c": "completed",
         "assigned_to_c": 2, "actual_hours_c": 1.0, "completed_at_c": f"{yesterday}T10:00:00",
         "created_at_c": "2024-03-04T09:00:00"},
        {"title_c": "Replace boiler valve", "category_c": "plumbing", "status_c": "open",
         "created_at_c": "2024-03-05T09:00:00"},
    ])


class TestTaskQueries:

    def test_get_all_tasks_only_housekeeping_newest_first(self, container, sample_tasks):
        tasks = asyncio.run(container.housekeeping.get_all_tasks())
        assert [t.title for t in tasks] == ["Refresh 202", "Refresh 201", "Deep clean 102", "Turn down 101"]
        assert tasks[1].actual_time == 30
        assert tasks[1].assigned_to == 1

    def test_estimated_time_defaults_to_thirty_minutes(self, container, sample_tasks):
        tasks = asyncio.run(container.housekeeping.get_all_tasks())
        assert all(t.estimated_time == 30 for t in tasks)

    def test_get_tasks_by_status(self, container, sample_tasks):
        tasks = asyncio.run(container.housekeeping.get_tasks_by_status("open"))
        assert [t.title for t in tasks] == ["Turn down 101"]

    def test_get_task_by_id_missing_raises(self, container, sample_tasks):
        with pytest.raises(TaskNotFoundError, match="Task with ID 404 not found"):
            asyncio.run(container.housekeeping.get_task_by_id(404))


class TestTaskWrites:

    def test_create_task_defaults(self, container, record_client, toast_channel):
        task = asyncio.run(container.housekeeping.create_task(HousekeepingTaskCreate(room_number="101")))

        assert task.title == "Housekeeping Task"
        assert task.status == "open"
        assert task.category == "housekeeping"
        assert task.created_by == "Front Desk"
        assert task.created_at
        assert task.estimated_time == 30
        assert toast_channel.messages() == ["Task created successfully"]

    def test_create_task_stores_estimate_in_hours(self, container, record_client):
        task = asyncio.run(container.housekeeping.create_task(
            HousekeepingTaskCreate(title="Suite refresh", estimated_time=45)
        ))
        assert record_client.rows("work_order_c")[0]["estimated_hours_c"] == 0.75
        assert task.estimated_time == 45

    def test_update_status_stamps_times(self, container, sample_tasks, toast_channel):
        started = asyncio.run(container.housekeeping.update_task_status(1, "in_progress"))
        assert started.start_time
        assert started.completed_time is None

        done = asyncio.run(container.housekeeping.update_task_status(1, "completed"))
        assert done.completed_time
        assert toast_channel.messages() == ["Task in progress", "Task completed"]

    def test_assign_task(self, container, sample_tasks):
        task = asyncio.run(container.housekeeping.assign_task(1, 2))
        assert task.status == "assigned"
        assert task.assigned_to == 2
        assert task.assigned_staff == "Tom Baker"

    def test_assign_task_unknown_staff(self, container, sample_tasks, record_client, toast_channel):
        assert asyncio.run(container.housekeeping.assign_task(1, 99)) is None
        assert toast_channel.messages() == ["Staff member with ID 99 not found"]
        assert record_client.rows("work_order_c")[0]["status_c"] == "open"

    def test_bulk_assign_skips_missing_rooms(self, container, sample_rooms, sample_staff, toast_channel):
        tasks = asyncio.run(container.housekeeping.bulk_assign_tasks([
            BulkAssignment(room_ids=[1, 99], staff_id=1, priority="high"),
        ]))

        assert len(tasks) == 1
        assert tasks[0].title == "Housekeeping - Room 101"
        assert tasks[0].description == "Standard cleaning"
        assert tasks[0].priority == "high"
        assert tasks[0].room_id == 1
        assert tasks[0].status == "assigned"
        assert tasks[0].assigned_staff == "Maria Lopez"
        assert "Room with ID 99 not found" in toast_channel.messages()
        assert toast_channel.messages()[-1] == "1 tasks assigned successfully"

    def test_delete_task(self, container, sample_tasks):
        assert asyncio.run(container.housekeeping.delete_task(1)) is True
        with pytest.raises(TaskNotFoundError):
            asyncio.run(container.housekeeping.get_task_by_id(1))

    def test_delete_task_without_results(self, container, record_client, toast_channel, monkeypatch):
        """后端只返回 success=True 时视为删除成功"""
        async def bare_success(table, params):
            return RecordResponse(success=True)

        monkeypatch.setattr(record_client, "delete_record", bare_success)
        assert asyncio.run(container.housekeeping.delete_task(7)) is True
        assert toast_channel.messages() == ["Task deleted successfully"]


class TestHousekeepingStaff:

    def test_available_staff(self, container, sample_staff):
        staff = asyncio.run(container.housekeeping.get_available_staff())
        assert [s.name for s in staff] == ["Maria Lopez", "Tom Baker"]

    def test_staff_delegation(self, container, sample_staff):
        assert len(asyncio.run(container.housekeeping.get_all_staff())) == 3
        assert asyncio.run(container.housekeeping.get_staff_by_id(3)).name == "Jin Park"


class TestHousekeepingStats:

    def test_stats(self, container, sample_tasks):
        stats = asyncio.run(container.housekeeping.get_housekeeping_stats())

        assert stats.total_tasks == 4
        assert stats.pending_tasks == 1
        assert stats.in_progress_tasks == 1
        assert stats.completed_today == 1
        assert stats.average_time == 45
        maria = stats.staff_stats[0]
        assert (maria.name, maria.active_assignments, maria.completed_today) == ("Maria Lopez", 1, 1)
        tom = stats.staff_stats[1]
        assert (tom.active_assignments, tom.completed_today) == (0, 0)

    def test_stats_offline(self, offline_container):
        stats = asyncio.run(offline_container.housekeeping.get_housekeeping_stats())
        assert stats.total_tasks == 0
        assert stats.staff_stats == []
