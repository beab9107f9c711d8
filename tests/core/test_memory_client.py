"""
内存 Record Client 测试
"""
import asyncio

import pytest

from core.records.memory import InMemoryRecordClient
from core.records.query import Condition, FilterOperator, OrderBy, QueryParams, SortType, WhereGroup


@pytest.fixture
def store():
    client = InMemoryRecordClient(lookups={"work_order_c": {"assigned_to_c": "staff_c"}})
    client.seed("room_c", [
        {"room_number_c": "101", "status_c": "Available", "floor_c": 1, "guest_name_c": None},
        {"room_number_c": "102", "status_c": "Occupied", "floor_c": 1, "guest_name_c": "Ann Smith"},
        {"room_number_c": "201", "status_c": "Available", "floor_c": 2, "guest_name_c": None},
        {"room_number_c": "310", "status_c": "Cleaning", "floor_c": None, "guest_name_c": "Bo Lee"},
    ])
    return client


def _fetch(client, table, **kwargs):
    return asyncio.run(client.fetch_records(table, QueryParams(**kwargs).to_params()))


class TestFetch:

    def test_where_conditions_are_anded(self, store):
        response = _fetch(store, "room_c", where=[
            Condition("status_c", values=["Available"]),
            Condition("floor_c", values=[2]),
        ])
        assert response.success
        assert [r["room_number_c"] for r in response.data] == ["201"]

    def test_where_group_or(self, store):
        group = WhereGroup.any_of(
            Condition("room_number_c", FilterOperator.CONTAINS, ["31"]),
            Condition("guest_name_c", FilterOperator.CONTAINS, ["smith"]),
        )
        response = _fetch(store, "room_c", where_groups=[group])
        assert sorted(r["room_number_c"] for r in response.data) == ["102", "310"]

    def test_not_equal_to_keeps_missing_values(self, store):
        response = _fetch(store, "room_c", where=[
            Condition("guest_name_c", FilterOperator.NOT_EQUAL_TO, ["Ann Smith"])
        ])
        assert len(response.data) == 3

    def test_order_desc_puts_missing_last(self, store):
        response = _fetch(store, "room_c", order_by=[OrderBy("floor_c", SortType.DESC)])
        floors = [r["floor_c"] for r in response.data]
        assert floors[0] == 2
        assert floors[-1] is None

    def test_paging_reports_total(self, store):
        response = _fetch(store, "room_c", limit=2, offset=1)
        assert response.total == 4
        assert [r["Id"] for r in response.data] == [2, 3]

    def test_field_selection_keeps_id(self, store):
        response = _fetch(store, "room_c", fields=["status_c"])
        assert set(response.data[0]) == {"Id", "status_c"}

    def test_lookup_expansion(self, store):
        store.seed("staff_c", [{"Id": 7, "Name": "Tom Baker"}])
        store.seed("work_order_c", [{"title_c": "Fix AC", "assigned_to_c": 7}])
        response = _fetch(store, "work_order_c")
        assert response.data[0]["assigned_to_c"] == {"Id": 7, "Name": "Tom Baker"}
        # 原始存储仍为 ID
        assert store.rows("work_order_c")[0]["assigned_to_c"] == 7

    def test_fail_next_is_one_shot(self, store):
        store.fail_next("fetch", "Service down")
        first = _fetch(store, "room_c")
        second = _fetch(store, "room_c")
        assert not first.success
        assert first.message == "Service down"
        assert second.success


class TestWrites:

    def test_get_missing_record(self, store):
        response = asyncio.run(store.get_record_by_id("room_c", 99))
        assert not response.success
        assert "99" in response.message

    def test_create_assigns_ids_and_flattens_lookups(self, store):
        response = asyncio.run(store.create_record("work_order_c", {"records": [
            {"Id": 500, "title_c": "Paint", "assigned_to_c": {"Id": 3, "Name": "X"}},
        ]}))
        successful, failed = response.split_results()
        assert not failed
        assert successful[0].data["Id"] == 1
        assert store.rows("work_order_c")[0]["assigned_to_c"] == 3

    def test_update_merges_fields(self, store):
        response = asyncio.run(store.update_record("room_c", {"records": [
            {"Id": 1, "status_c": "Cleaning"},
        ]}))
        assert response.results[0].success
        assert response.results[0].data["room_number_c"] == "101"
        assert response.results[0].data["status_c"] == "Cleaning"

    def test_update_if_match_rejects_stale_value(self, store):
        response = asyncio.run(store.update_record("room_c", {
            "records": [{"Id": 1, "status_c": "Cleaning"}],
            "ifMatch": [{"Id": 1, "FieldName": "status_c", "Value": "Occupied"}],
        }))
        assert not response.results[0].success
        assert "modified by another request" in response.results[0].message
        assert store.rows("room_c")[0]["status_c"] == "Available"

    def test_reject_when_fails_single_records(self, store):
        store.reject_when("create", lambda r: r.get("room_number_c") == "bad", "Invalid room")
        response = asyncio.run(store.create_record("room_c", {"records": [
            {"room_number_c": "401"}, {"room_number_c": "bad"},
        ]}))
        successful, failed = response.split_results()
        assert len(successful) == 1
        assert failed[0].message == "Invalid room"

    def test_delete_reports_missing_ids(self, store):
        response = asyncio.run(store.delete_record("room_c", {"RecordIds": [1, 42]}))
        assert [r.success for r in response.results] == [True, False]
        assert len(store.rows("room_c")) == 3

    def test_calls_are_recorded(self, store):
        asyncio.run(store.get_record_by_id("room_c", 1))
        assert store.calls == [("get", "room_c")]
