"""
Pytest 配置和共享 fixtures
"""
import random

import pytest
from fastapi.testclient import TestClient

from core.notification import Notifier
from core.records.memory import InMemoryRecordClient
from hotelops.config import Settings
from hotelops.main import create_app
from hotelops.notification import InMemoryToastChannel
from hotelops.services.container import ServiceContainer

LOOKUPS = {
    "work_order_c": {"assigned_to_c": "staff_c", "room_id_c": "room_c"},
    "payment_c": {"booking_id_c": "booking_c"},
}


@pytest.fixture
def settings():
    """测试配置（不读取 .env）"""
    return Settings(_env_file=None, ACTING_USER="Front Desk", CONDITIONAL_WRITES=False)


@pytest.fixture
def record_client():
    """内存 Record Client"""
    return InMemoryRecordClient(lookups=LOOKUPS)


@pytest.fixture
def toast_channel():
    return InMemoryToastChannel()


@pytest.fixture
def notifier(toast_channel):
    return Notifier([toast_channel])


@pytest.fixture
def container(record_client, notifier, settings):
    """服务容器（固定随机种子）"""
    return ServiceContainer(record_client, notifier, settings, rng=random.Random(7))


@pytest.fixture
def offline_container(notifier, settings):
    """未配置后端的服务容器"""
    return ServiceContainer(None, notifier, settings, rng=random.Random(7))


@pytest.fixture
def client(container, settings):
    """创建测试客户端"""
    app = create_app(settings, container)
    with TestClient(app) as test_client:
        yield test_client


# ============== 示例数据 ==============

@pytest.fixture
def sample_rooms(record_client):
    """四间房：两间空房、一间在住、一间维修"""
    return record_client.seed("room_c", [
        {"Name": "Room 101", "room_number_c": "101", "floor_c": 1, "room_type_c": "Standard",
         "status_c": "Available", "nightly_rate_c": 120, "last_updated_c": "2024-03-01T08:00:00"},
        {"Name": "Room 102", "room_number_c": "102", "floor_c": 1, "room_type_c": "Standard",
         "status_c": "Available", "nightly_rate_c": 120, "last_updated_c": "2024-03-01T08:00:00"},
        {"Name": "Room 201", "room_number_c": "201", "floor_c": 2, "room_type_c": "Deluxe",
         "status_c": "Occupied", "nightly_rate_c": 220, "guest_name_c": "Alice Martin",
         "checkin_time_c": "2024-03-01T14:00:00", "last_updated_c": "2024-03-01T14:00:00"},
        {"Name": "Room 202", "room_number_c": "202", "floor_c": 2, "room_type_c": "Deluxe",
         "status_c": "Maintenance", "nightly_rate_c": 220, "last_updated_c": "2024-03-01T08:00:00"},
    ])


@pytest.fixture
def sample_staff(record_client):
    return record_client.seed("staff_c", [
        {"Name": "Maria Lopez", "name_c": "Maria Lopez", "role_c": "Housekeeper", "shift_c": "Morning",
         "status_c": "Active", "hours_worked_c": 30, "hireDate_c": "2023-05-01"},
        {"Name": "Tom Baker", "name_c": "Tom Baker", "role_c": "Engineer", "shift_c": "Night",
         "status_c": "Available", "hours_worked_c": 50},
        {"Name": "Jin Park", "name_c": "Jin Park", "role_c": "Receptionist", "shift_c": "Day",
         "status_c": "On Leave", "hours_worked_c": 0},
    ])


@pytest.fixture
def sample_bookings(record_client):
    return record_client.seed("booking_c", [
        {"guest_name_c": "Alice Martin", "room_number_c": "201", "check_in_date_c": "2024-03-01",
         "check_out_date_c": "2024-03-04", "status_c": "Checked In", "total_amount_c": 660,
         "payment_status_c": "Paid"},
        {"guest_name_c": "Bob Chen", "room_number_c": "101", "check_in_date_c": "2024-03-10",
         "check_out_date_c": "2024-03-12", "status_c": "Confirmed", "total_amount_c": 240,
         "payment_status_c": "Unpaid"},
        {"guest_name_c": "Carla Ruiz", "room_number_c": "102", "check_in_date_c": "2024-02-20",
         "check_out_date_c": "2024-02-22", "status_c": "Cancelled", "total_amount_c": 240,
         "payment_status_c": "Unpaid"},
    ])
