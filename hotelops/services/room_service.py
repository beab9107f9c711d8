"""
房间服务
管理 room_c 表：房间状态流转、入住/退房、封锁、备注

状态变更采用 读取-追加历史-整体写回 的方式。
未开启条件写入时两个并发变更可能丢失一条历史记录（后写覆盖）；
开启 CONDITIONAL_WRITES 后写入附带 last_updated_c 前置条件，过期写入会被后端拒绝。
"""
import logging
import time
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from core.records import Condition, FilterOperator, RecordNotFoundError, WhereGroup
from hotelops.models.enums import RoomStatus
from hotelops.models.fields import ROOM_FIELDS
from hotelops.models.schemas import (
    GuestAssignment, Room, RoomCreate, RoomNote, RoomStats, RoomUpdate, StatusHistoryEntry,
)
from hotelops.services.base import CLIENT_UNAVAILABLE, RecordService, now_iso, service_call

logger = logging.getLogger(__name__)

# 房间变为 Available 时清空的入住信息
GUEST_FIELDS = ("guest_name", "checkin_time", "checkout_time")


class RoomNotFoundError(RecordNotFoundError):
    entity = "Room"


class RoomService(RecordService):
    """房间服务"""

    fields = ROOM_FIELDS

    def _to_room(self, record, attrs=None) -> Room:
        return Room(**self.fields.from_record(record, attrs))

    # ============== 查询 ==============

    @service_call("fetch rooms", default=list)
    async def get_all(self) -> List[Room]:
        """获取全部房间"""
        rows = await self._fetch_rows(self.fields.query(), "fetch rooms")
        return [self._to_room(r) for r in rows]

    async def get_by_id(self, room_id: int) -> Room:
        """获取单个房间，不存在时抛出 RoomNotFoundError"""
        if self.client is None:
            self.notifier.error(CLIENT_UNAVAILABLE)
            raise RoomNotFoundError(room_id)
        row = await self._get_row(int(room_id), f"fetch room {room_id}", notify=False)
        if not row:
            raise RoomNotFoundError(room_id)
        return self._to_room(row)

    @service_call("fetch rooms by floor", default=list)
    async def get_by_floor(self, floor: int) -> List[Room]:
        attrs = ["name", "room_number", "floor", "status", "room_type"]
        query = self.fields.query(
            attrs=attrs,
            where=[Condition(self.fields.column("floor"), values=[floor])],
        )
        rows = await self._fetch_rows(query, "fetch rooms by floor")
        return [self._to_room(r, attrs) for r in rows]

    @service_call("fetch rooms by status", default=list)
    async def get_by_status(self, status: str) -> List[Room]:
        attrs = ["name", "room_number", "status", "room_type"]
        query = self.fields.query(
            attrs=attrs,
            where=[Condition(self.fields.column("status"), values=[status])],
        )
        rows = await self._fetch_rows(query, "fetch rooms by status")
        return [self._to_room(r, attrs) for r in rows]

    @service_call("search rooms", default=list)
    async def search(self, query: Optional[str]) -> List[Room]:
        """按房间号或客人姓名模糊搜索；空查询返回全部房间"""
        if not query or not query.strip():
            return await self.get_all()

        term = query.strip().lower()
        attrs = ["name", "room_number", "guest_name", "status"]
        params = self.fields.query(
            attrs=attrs,
            where_groups=[WhereGroup.any_of(
                Condition(self.fields.column("room_number"), FilterOperator.CONTAINS, [term]),
                Condition(self.fields.column("guest_name"), FilterOperator.CONTAINS, [term]),
            )],
        )
        rows = await self._fetch_rows(params, "search rooms")
        return [self._to_room(r, attrs) for r in rows]

    # ============== 增删改 ==============

    @service_call("create room")
    async def create(self, data: RoomCreate) -> Optional[Room]:
        """创建房间"""
        values = data.model_dump()
        values["last_updated"] = now_iso()
        record = self.fields.to_record(values, partial=True)
        outcome = await self._write("create", [record], "create room")
        if not outcome.records:
            return None
        self.notifier.success(f"Room {data.room_number} created successfully")
        return self._to_room(outcome.records[0])

    @service_call("delete room", default=False)
    async def delete(self, room_id: int) -> bool:
        deleted = await self._delete_ids([int(room_id)], "delete room")
        if deleted:
            self.notifier.success("Room deleted successfully")
        return deleted

    @service_call("update room")
    async def update_room(self, room_id: int, data: RoomUpdate) -> Optional[Room]:
        """更新房间属性（只写入提供的字段），返回重新读取的房间"""
        values = data.model_dump(exclude_unset=True)
        values["last_updated"] = now_iso()
        record = self.fields.to_record(values, partial=True, record_id=int(room_id))
        outcome = await self._write("update", [record], "update room")
        if not outcome.records:
            return None
        return await self.get_by_id(room_id)

    # ============== 状态流转 ==============

    def _history_entry(self, status: str, changed_from: Optional[str], changed_by: Optional[str] = None,
                       note: Optional[str] = None, guest_name: Optional[str] = None) -> Dict[str, Any]:
        entry = StatusHistoryEntry(
            status=status,
            timestamp=now_iso(),
            changed_from=changed_from,
            changed_by=changed_by or self.acting_user,
            note=note,
            guest_name=guest_name,
        )
        return entry.model_dump(by_alias=True, exclude_none=True)

    def _transition_record(self, room: Room, status: str, entry: Dict[str, Any],
                           changes: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """构造一次状态变更的完整写入记录（历史整体重写）"""
        history = [h.model_dump(by_alias=True, exclude_none=True) for h in room.status_history]
        history.append(entry)
        values: Dict[str, Any] = {
            "status": status,
            "last_updated": now_iso(),
            "status_history": history,
        }
        if status == RoomStatus.AVAILABLE.value:
            values.update({name: None for name in GUEST_FIELDS})
        values.update(changes or {})
        return self.fields.to_record(values, partial=True, record_id=room.id)

    async def _write_room(self, room: Room, values: Dict[str, Any], action: str) -> Optional[Room]:
        """写回单个房间并重新读取；条件写入时以读取到的 last_updated_c 为前置条件"""
        if_match = self._if_match(room.id, self.fields.column("last_updated"), room.last_updated)
        outcome = await self._write("update", [values], action, if_match=if_match)
        if not outcome.records:
            return None
        return await self.get_by_id(room.id)

    @service_call("update room status")
    async def update_status(self, room_id: int, status: str,
                            changed_by: Optional[str] = None) -> Optional[Room]:
        """变更房间状态并追加一条历史记录"""
        room = await self.get_by_id(room_id)
        entry = self._history_entry(status, room.status, changed_by)
        record = self._transition_record(room, status, entry)
        return await self._write_room(room, record, "update room status")

    async def mark_cleaning_complete(self, room_id: int) -> Optional[Room]:
        return await self.update_status(room_id, RoomStatus.AVAILABLE.value)

    @service_call("assign guest")
    async def assign_guest(self, room_id: int, assignment: GuestAssignment) -> Optional[Room]:
        """入住：房间必须为 Available"""
        room = await self.get_by_id(room_id)
        if room.status != RoomStatus.AVAILABLE.value:
            raise ValueError(f"Room {room.room_number} is not available for assignment")

        status = RoomStatus.OCCUPIED.value
        entry = self._history_entry(status, room.status, guest_name=assignment.guest_name)
        record = self._transition_record(room, status, entry, {
            "guest_name": assignment.guest_name,
            "checkin_time": assignment.checkin_time or now_iso(),
            "checkout_time": assignment.checkout_time,
        })
        result = await self._write_room(room, record, "assign guest")
        if result:
            self.notifier.success(f"{assignment.guest_name} checked into room {room.room_number}")
        return result

    @service_call("checkout guest")
    async def checkout_guest(self, room_id: int) -> Optional[Room]:
        """退房：房间必须为 Occupied，转为 Cleaning"""
        room = await self.get_by_id(room_id)
        if room.status != RoomStatus.OCCUPIED.value:
            raise ValueError(f"Room {room.room_number} is not currently occupied")

        status = RoomStatus.CLEANING.value
        entry = self._history_entry(status, room.status, note="Guest checkout completed")
        record = self._transition_record(room, status, entry)
        return await self._write_room(room, record, "checkout guest")

    @service_call("block room")
    async def block_room(self, room_id: int, reason: str) -> Optional[Room]:
        room = await self.get_by_id(room_id)
        status = RoomStatus.OUT_OF_ORDER.value
        entry = self._history_entry(status, room.status, note=f"Room blocked - {reason}")
        record = self._transition_record(room, status, entry, {"blocked": True, "block_reason": reason})
        return await self._write_room(room, record, "block room")

    @service_call("unblock room")
    async def unblock_room(self, room_id: int) -> Optional[Room]:
        room = await self.get_by_id(room_id)
        status = RoomStatus.AVAILABLE.value
        entry = self._history_entry(status, room.status, note="Room unblocked and made available")
        record = self._transition_record(room, status, entry, {"blocked": False, "block_reason": None})
        return await self._write_room(room, record, "unblock room")

    # ============== 批量操作 ==============

    async def _bulk_transition(self, room_ids: Sequence[int], status: str, note: str,
                               changes: Optional[Dict[str, Any]], action: str) -> List[Room]:
        records = []
        if_match = []
        for room_id in room_ids:
            try:
                room = await self.get_by_id(room_id)
            except RoomNotFoundError as e:
                logger.warning(f"Skipping room in bulk update: {e}")
                continue
            entry = self._history_entry(status, room.status, note=note)
            records.append(self._transition_record(room, status, entry, changes))
            if_match.extend(
                self._if_match(room.id, self.fields.column("last_updated"), room.last_updated) or []
            )

        if not records:
            return []
        outcome = await self._write("update", records, action, if_match=if_match or None)
        if not outcome.records:
            return []

        updated = []
        for room_id in room_ids:
            try:
                updated.append(await self.get_by_id(room_id))
            except RoomNotFoundError as e:
                logger.error(f"Failed to fetch updated room {room_id}: {e}")
        return updated

    @service_call("update room statuses", default=list)
    async def bulk_update_status(self, room_ids: Sequence[int], status: str) -> List[Room]:
        """批量变更状态：每个房间一条历史记录，一次批量写入"""
        changes = None
        if status == RoomStatus.AVAILABLE.value:
            changes = {name: None for name in GUEST_FIELDS}
        return await self._bulk_transition(room_ids, status, "Bulk status change", changes,
                                           "update room statuses")

    @service_call("block rooms", default=list)
    async def bulk_block_rooms(self, room_ids: Sequence[int], reason: str) -> List[Room]:
        return await self._bulk_transition(
            room_ids, RoomStatus.OUT_OF_ORDER.value, f"Room blocked - {reason}",
            {"blocked": True, "block_reason": reason}, "block rooms",
        )

    # ============== 备注 ==============

    @staticmethod
    def _next_note_id(notes: List[RoomNote]) -> int:
        """毫秒时间戳，且严格大于已有的最大 ID"""
        last_id = max((n.id for n in notes), default=0)
        return max(int(time.time() * 1000), last_id + 1)

    @service_call("add note")
    async def add_note(self, room_id: int, content: str) -> Optional[Room]:
        """在备注列表末尾追加一条"""
        room = await self.get_by_id(room_id)
        note = RoomNote(
            id=self._next_note_id(room.notes),
            content=content,
            timestamp=now_iso(),
            added_by=self.acting_user,
        )
        notes = [n.model_dump(by_alias=True) for n in room.notes]
        notes.append(note.model_dump(by_alias=True))
        record = self.fields.to_record(
            {"notes": notes, "last_updated": now_iso()}, partial=True, record_id=room.id
        )
        return await self._write_room(room, record, "add note")

    @service_call("delete note")
    async def delete_note(self, room_id: int, note_id: int) -> Optional[Room]:
        room = await self.get_by_id(room_id)
        notes = [n.model_dump(by_alias=True) for n in room.notes if n.id != note_id]
        record = self.fields.to_record(
            {"notes": notes, "last_updated": now_iso()}, partial=True, record_id=room.id
        )
        return await self._write_room(room, record, "delete note")

    # ============== 统计 ==============

    @service_call("fetch room stats", default=RoomStats)
    async def get_room_stats(self) -> RoomStats:
        """房态统计，入住率保留一位小数"""
        query = self.fields.query(attrs=["status"])
        rows = await self._fetch_rows(query, "fetch room stats")
        counts = Counter(self.fields.spec("status").read(r) for r in rows)
        total = len(rows)
        occupied = counts.get(RoomStatus.OCCUPIED.value, 0)
        return RoomStats(
            total=total,
            available=counts.get(RoomStatus.AVAILABLE.value, 0),
            occupied=occupied,
            maintenance=counts.get(RoomStatus.MAINTENANCE.value, 0),
            cleaning=counts.get(RoomStatus.CLEANING.value, 0),
            occupancy_rate=round(occupied / total * 100, 1) if total else 0.0,
        )
