"""
预订服务
booking_c 表的 CRUD 与状态变更
"""
import logging
from typing import List, Optional, Sequence, Union

from core.records import Condition, OrderBy, SortType, WhereGroup
from hotelops.models.enums import RoomStatus
from hotelops.models.fields import BOOKING_FIELDS, ROOM_FIELDS
from hotelops.models.schemas import Booking, BookingCreate, BookingUpdate, Room
from hotelops.services.base import RecordService, service_call

logger = logging.getLogger(__name__)

PAGE_LIMIT = 100


class BookingService(RecordService):
    """预订服务"""

    fields = BOOKING_FIELDS

    def _to_booking(self, record) -> Booking:
        return Booking(**self.fields.from_record(record))

    @service_call("fetch bookings", default=list)
    async def get_all(self, status: Optional[str] = None) -> List[Booking]:
        """获取预订列表（按入住日期倒序），可按状态过滤"""
        where_groups = []
        if status:
            where_groups.append(WhereGroup.any_of(
                Condition(self.fields.column("status"), values=[status])
            ))
        query = self.fields.query(
            where_groups=where_groups,
            order_by=[OrderBy(self.fields.column("check_in_date"), SortType.DESC)],
            limit=PAGE_LIMIT,
        )
        rows = await self._fetch_rows(query, "fetch bookings")
        return [self._to_booking(r) for r in rows]

    @service_call("fetch booking")
    async def get_by_id(self, booking_id: int) -> Optional[Booking]:
        """获取单个预订，不存在时返回 None"""
        row = await self._get_row(booking_id, f"fetch booking {booking_id}", notify=False)
        return self._to_booking(row) if row else None

    @service_call("create bookings", default=list)
    async def create(self, data: Union[BookingCreate, Sequence[BookingCreate]]) -> List[Booking]:
        """创建一个或多个预订，只返回创建成功的记录"""
        items = [data] if isinstance(data, BookingCreate) else list(data)
        records = [self.fields.to_record(item.model_dump()) for item in items]
        outcome = await self._write("create", records, "create bookings")
        if outcome.failed:
            logger.error(f"Failed to create {outcome.failed} bookings")
        if outcome.records:
            self.notifier.success(f"{len(outcome.records)} booking(s) created successfully")
        return [self._to_booking(r) for r in outcome.records]

    @service_call("update booking")
    async def update(self, booking_id: int, data: BookingUpdate) -> Optional[Booking]:
        """更新预订（只写入提供的字段）；任何一条失败都返回 None"""
        record = self.fields.to_record(
            data.model_dump(exclude_unset=True), partial=True, record_id=booking_id
        )
        outcome = await self._write("update", [record], "update booking")
        if not outcome.ok or not outcome.records:
            return None
        self.notifier.success("Booking updated successfully")
        return self._to_booking(outcome.records[0])

    @service_call("delete booking", default=False)
    async def delete(self, booking_ids: Union[int, Sequence[int]]) -> bool:
        """删除一个或多个预订"""
        ids = [booking_ids] if isinstance(booking_ids, int) else list(booking_ids)
        deleted = await self._delete_ids(ids, "delete booking")
        if deleted:
            self.notifier.success("Booking deleted successfully")
        return deleted

    @service_call("update booking status")
    async def update_status(self, booking_id: int, status: str) -> Optional[Booking]:
        record = self.fields.to_record({"status": status}, partial=True, record_id=booking_id)
        outcome = await self._write("update", [record], "update booking status")
        if not outcome.ok or not outcome.records:
            return None
        self.notifier.success("Booking status updated successfully")
        return self._to_booking(outcome.records[0])

    @service_call("fetch available rooms", default=list)
    async def get_available_rooms(self) -> List[Room]:
        """可预订的房间（状态为 Available）"""
        query = ROOM_FIELDS.query(
            attrs=["room_number", "room_type", "nightly_rate", "status"],
            where_groups=[WhereGroup.any_of(
                Condition(ROOM_FIELDS.column("status"), values=[RoomStatus.AVAILABLE.value])
            )],
            limit=PAGE_LIMIT,
        )
        rows = await self._fetch_rows(query, "fetch available rooms", table=ROOM_FIELDS.table)
        return [
            Room(**ROOM_FIELDS.from_record(r, ["room_number", "room_type", "nightly_rate", "status"]))
            for r in rows
        ]
