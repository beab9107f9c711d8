"""
进程内 Record Client

完整实现 RecordClient 的线上约定（字段选择、where / whereGroups、排序、分页、
查找字段展开、ifMatch 条件写入），数据保存在内存字典中。
用作测试替身，也可用于本地演示。
"""
import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.records.client import RecordClient, RecordResponse, RecordResult
from core.records.query import Condition, FilterOperator, QueryParams, SortType, SubGroup, WhereGroup

logger = logging.getLogger(__name__)


@dataclass
class _Rejection:
    operation: str
    table: Optional[str]
    predicate: Callable[[Dict[str, Any]], bool]
    message: str


def _equals(actual: Any, expected: Any) -> bool:
    if actual == expected:
        return True
    if actual is None or expected is None:
        return False
    return str(actual) == str(expected)


def _compare(actual: Any, expected: Any) -> Optional[int]:
    if actual is None or expected is None:
        return None
    try:
        return (actual > expected) - (actual < expected)
    except TypeError:
        a, b = str(actual), str(expected)
        return (a > b) - (a < b)


def _match_condition(record: Dict[str, Any], condition: Condition) -> bool:
    actual = record.get(condition.field_name)
    if isinstance(actual, dict):
        actual = actual.get("Id")
    op = condition.operator
    values = condition.values or [None]

    if op == FilterOperator.EQUAL_TO:
        return any(_equals(actual, v) for v in values)
    if op == FilterOperator.NOT_EQUAL_TO:
        return not any(_equals(actual, v) for v in values)
    if op == FilterOperator.CONTAINS:
        if actual is None:
            return False
        haystack = str(actual).lower()
        return any(str(v).lower() in haystack for v in values if v is not None)

    results = [_compare(actual, v) for v in values]
    if op == FilterOperator.GREATER_THAN:
        return any(r is not None and r > 0 for r in results)
    if op == FilterOperator.GREATER_THAN_OR_EQUAL_TO:
        return any(r is not None and r >= 0 for r in results)
    if op == FilterOperator.LESS_THAN:
        return any(r is not None and r < 0 for r in results)
    if op == FilterOperator.LESS_THAN_OR_EQUAL_TO:
        return any(r is not None and r <= 0 for r in results)
    return False


def _match_sub_group(record: Dict[str, Any], group: SubGroup) -> bool:
    if not group.conditions:
        return True
    matches = (_match_condition(record, c) for c in group.conditions)
    if group.operator.upper() == "OR":
        return any(matches)
    return all(matches)


def _match_where_group(record: Dict[str, Any], group: WhereGroup) -> bool:
    if not group.sub_groups:
        return True
    matches = (_match_sub_group(record, g) for g in group.sub_groups)
    if group.operator.upper() == "AND":
        return all(matches)
    return any(matches)


class InMemoryRecordClient(RecordClient):
    """
    内存记录存储

    使用方式：
        client = InMemoryRecordClient(lookups={"work_order_c": {"assigned_to_c": "staff_c"}})
        client.seed("room_c", [{"room_number_c": "101", "status_c": "Available"}])
        response = await client.fetch_records("room_c", params)

    每个操作开始时 await asyncio.sleep(latency)，让并发调用可以交错执行。
    """

    def __init__(self, lookups: Optional[Dict[str, Dict[str, str]]] = None, latency: float = 0.0):
        self._tables: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._next_ids: Dict[str, int] = {}
        self._lookups = lookups or {}
        self._pending_failures: List[Tuple[str, Optional[str], str]] = []
        self._rejections: List[_Rejection] = []
        self.latency = latency
        self.calls: List[Tuple[str, str]] = []

    # ============== 测试辅助 ==============

    def seed(self, table: str, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """直接写入初始数据，缺少 Id 的记录自动编号"""
        stored = []
        for record in records:
            stored.append(copy.deepcopy(self._insert(table, record)))
        return stored

    def rows(self, table: str) -> List[Dict[str, Any]]:
        """返回表中原始数据的副本（不做查找展开）"""
        return [copy.deepcopy(r) for r in self._tables.get(table, {}).values()]

    def fail_next(self, operation: str, message: str = "Backend unavailable",
                  table: Optional[str] = None) -> None:
        """下一次匹配的操作整体返回 success=False"""
        self._pending_failures.append((operation, table, message))

    def reject_when(self, operation: str, predicate: Callable[[Dict[str, Any]], bool],
                    message: str = "Record rejected", table: Optional[str] = None) -> None:
        """写操作中满足 predicate 的单条记录返回失败结果（持续生效）"""
        self._rejections.append(_Rejection(operation, table, predicate, message))

    def clear_failures(self) -> None:
        self._pending_failures.clear()
        self._rejections.clear()

    # ============== 内部实现 ==============

    async def _begin(self, operation: str, table: str) -> Optional[RecordResponse]:
        await asyncio.sleep(self.latency)
        self.calls.append((operation, table))
        for index, (op, tbl, message) in enumerate(self._pending_failures):
            if op == operation and (tbl is None or tbl == table):
                del self._pending_failures[index]
                logger.debug(f"Injected failure for {operation} on {table}: {message}")
                return RecordResponse.failure(message)
        return None

    def _rejected(self, operation: str, table: str, record: Dict[str, Any]) -> Optional[str]:
        for rejection in self._rejections:
            if rejection.operation != operation:
                continue
            if rejection.table is not None and rejection.table != table:
                continue
            if rejection.predicate(record):
                return rejection.message
        return None

    def _insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        rows = self._tables.setdefault(table, {})
        record = copy.deepcopy(record)
        record_id = record.get("Id")
        if record_id is None:
            record_id = self._next_ids.get(table, 1)
            record["Id"] = record_id
        self._next_ids[table] = max(self._next_ids.get(table, 1), int(record_id) + 1)
        rows[int(record_id)] = record
        return record

    def _expand(self, table: str, record: Dict[str, Any], fields: Optional[List[str]] = None) -> Dict[str, Any]:
        """按字段选择裁剪，并把查找列展开为 {Id, Name}"""
        if fields:
            result = {"Id": record["Id"]}
            for name in fields:
                if name in record:
                    result[name] = copy.deepcopy(record[name])
        else:
            result = copy.deepcopy(record)

        for column, target_table in self._lookups.get(table, {}).items():
            raw = result.get(column)
            if raw is None or isinstance(raw, dict):
                continue
            target = self._tables.get(target_table, {}).get(self._as_id(raw))
            name = target.get("Name") if target else None
            result[column] = {"Id": raw, "Name": name if name is not None else str(raw)}
        return result

    @staticmethod
    def _as_id(value: Any) -> Optional[int]:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _flatten_lookups(record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: (value.get("Id") if isinstance(value, dict) and "Id" in value else value)
            for key, value in record.items()
        }

    # ============== RecordClient 接口 ==============

    async def fetch_records(self, table: str, params: Optional[Dict[str, Any]] = None) -> RecordResponse:
        failure = await self._begin("fetch", table)
        if failure:
            return failure

        query = QueryParams.from_params(params)
        rows = list(self._tables.get(table, {}).values())
        rows = [r for r in rows if all(_match_condition(r, c) for c in query.where)]
        rows = [r for r in rows if all(_match_where_group(r, g) for g in query.where_groups)]

        # 多键排序：从最后一个键开始做稳定排序
        for order in reversed(query.order_by):
            rows.sort(
                key=lambda r, f=order.field_name: (r.get(f) is None, r.get(f) if r.get(f) is not None else 0),
                reverse=order.sort_type == SortType.DESC,
            )
            if order.sort_type == SortType.DESC:
                # 倒序时把空值挪回末尾
                rows.sort(key=lambda r, f=order.field_name: r.get(f) is None)

        total = len(rows)
        if query.limit is not None:
            rows = rows[query.offset:query.offset + query.limit]
        elif query.offset:
            rows = rows[query.offset:]

        data = [self._expand(table, r, query.fields) for r in rows]
        return RecordResponse(success=True, data=data, total=total)

    async def get_record_by_id(
        self, table: str, record_id: int, params: Optional[Dict[str, Any]] = None
    ) -> RecordResponse:
        failure = await self._begin("get", table)
        if failure:
            return failure

        record = self._tables.get(table, {}).get(self._as_id(record_id))
        if record is None:
            return RecordResponse(success=False, message=f"Record with Id {record_id} does not exist")
        query = QueryParams.from_params(params)
        return RecordResponse(success=True, data=self._expand(table, record, query.fields))

    async def create_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        failure = await self._begin("create", table)
        if failure:
            return failure

        results = []
        for record in params.get("records", []):
            record = self._flatten_lookups(record)
            record.pop("Id", None)
            message = self._rejected("create", table, record)
            if message:
                results.append(RecordResult(success=False, message=message))
                continue
            stored = self._insert(table, record)
            results.append(RecordResult(success=True, data=self._expand(table, stored)))
        return RecordResponse(success=True, results=results)

    async def update_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        failure = await self._begin("update", table)
        if failure:
            return failure

        rows = self._tables.get(table, {})
        preconditions = {
            self._as_id(p.get("Id")): p for p in params.get("ifMatch", []) or []
        }
        results = []
        for record in params.get("records", []):
            record = self._flatten_lookups(record)
            record_id = self._as_id(record.get("Id"))
            stored = rows.get(record_id)
            if stored is None:
                results.append(RecordResult(
                    success=False, message=f"Record with Id {record.get('Id')} does not exist"
                ))
                continue

            precondition = preconditions.get(record_id)
            if precondition is not None and not _equals(
                stored.get(precondition.get("FieldName")), precondition.get("Value")
            ):
                results.append(RecordResult(
                    success=False, message=f"Record {record_id} was modified by another request"
                ))
                continue

            message = self._rejected("update", table, record)
            if message:
                results.append(RecordResult(success=False, message=message))
                continue

            record.pop("Id", None)
            stored.update(record)
            results.append(RecordResult(success=True, data=self._expand(table, stored)))
        return RecordResponse(success=True, results=results)

    async def delete_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        failure = await self._begin("delete", table)
        if failure:
            return failure

        rows = self._tables.get(table, {})
        results = []
        for raw_id in params.get("RecordIds", []):
            record_id = self._as_id(raw_id)
            if record_id not in rows:
                results.append(RecordResult(success=False, message=f"Record with Id {raw_id} does not exist"))
                continue
            message = self._rejected("delete", table, rows[record_id])
            if message:
                results.append(RecordResult(success=False, message=message))
                continue
            del rows[record_id]
            results.append(RecordResult(success=True, data={"Id": record_id}))
        return RecordResponse(success=True, results=results)
