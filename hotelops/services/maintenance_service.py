"""
维修服务
维修工单（work_order_c 中 category_c 不为 housekeeping 的记录）、设备、供应商
"""
import logging
from datetime import datetime
from typing import List, Optional

from core.records import Condition, FilterOperator, OrderBy, SortType
from hotelops.models.enums import HOUSEKEEPING_CATEGORY, TaskPriority, TaskStatus
from hotelops.models.fields import EQUIPMENT_FIELDS, VENDOR_FIELDS, WORK_ORDER_FIELDS
from hotelops.models.schemas import (
    Equipment, MaintenanceStats, Vendor, WorkOrder, WorkOrderCreate, WorkOrderUpdate,
)
from hotelops.services.base import RecordService, now_iso, service_call

logger = logging.getLogger(__name__)


def _completion_hours(order: WorkOrder) -> Optional[float]:
    """创建到完成的小时数；时间无法解析时返回 None"""
    if not order.created_at or not order.completed_at:
        return None
    try:
        created = datetime.fromisoformat(order.created_at)
        completed = datetime.fromisoformat(order.completed_at)
        return (completed - created).total_seconds() / 3600
    except (TypeError, ValueError):
        logger.debug(f"Unparseable timestamps on work order {order.id}")
        return None


class MaintenanceService(RecordService):
    """维修工单服务"""

    fields = WORK_ORDER_FIELDS

    def _to_order(self, record) -> WorkOrder:
        return WorkOrder(**self.fields.from_record(record))

    # ============== 工单 ==============

    @service_call("load work orders", default=list)
    async def get_all_work_orders(self) -> List[WorkOrder]:
        """全部维修工单（不含清洁任务），按创建时间倒序"""
        query = self.fields.query(
            where=[Condition(self.fields.column("category"), FilterOperator.NOT_EQUAL_TO,
                             [HOUSEKEEPING_CATEGORY])],
            order_by=[OrderBy(self.fields.column("created_at"), SortType.DESC)],
        )
        rows = await self._fetch_rows(query, "load work orders")
        return [self._to_order(r) for r in rows]

    @service_call("load work order")
    async def get_work_order_by_id(self, order_id: int) -> Optional[WorkOrder]:
        row = await self._get_row(int(order_id), f"load work order {order_id}")
        return self._to_order(row) if row else None

    @service_call("create work order")
    async def create_work_order(self, data: WorkOrderCreate) -> Optional[WorkOrder]:
        values = data.model_dump()
        values["created_at"] = values["updated_at"] = now_iso()
        record = self.fields.to_record(values, partial=True)
        outcome = await self._write("create", [record], "create work order")
        if not outcome.records:
            return None
        self.notifier.success("Work order created successfully")
        return self._to_order(outcome.records[0])

    @service_call("update work order")
    async def update_work_order(self, order_id: int, data: WorkOrderUpdate) -> Optional[WorkOrder]:
        """只写入提供的字段，并更新 updated_at_c"""
        values = data.model_dump(exclude_unset=True)
        values["updated_at"] = now_iso()
        if values.get("status") == TaskStatus.COMPLETED.value:
            values["completed_at"] = now_iso()
        record = self.fields.to_record(values, partial=True, record_id=int(order_id))
        outcome = await self._write("update", [record], "update work order")
        if not outcome.records:
            return None
        self.notifier.success("Work order updated successfully")
        return self._to_order(outcome.records[0])

    async def update_work_order_status(self, order_id: int, status: str) -> Optional[WorkOrder]:
        return await self.update_work_order(order_id, WorkOrderUpdate(status=status))

    @service_call("delete work order", default=False)
    async def delete_work_order(self, order_id: int) -> bool:
        deleted = await self._delete_ids([int(order_id)], "delete work order")
        if deleted:
            self.notifier.success("Work order deleted successfully")
        return deleted

    # ============== 统计 ==============

    @service_call("calculate maintenance stats", default=MaintenanceStats)
    async def get_maintenance_stats(self) -> MaintenanceStats:
        """
        工单统计

        avgCompletionTime 为已完成工单从创建到完成的平均小时数，没有已完成工单时为 0
        """
        orders = await self.get_all_work_orders()

        def count(status: str) -> int:
            return sum(1 for o in orders if o.status == status)

        durations = [
            hours for hours in (_completion_hours(o) for o in orders
                                if o.status == TaskStatus.COMPLETED.value)
            if hours is not None
        ]
        return MaintenanceStats(
            total=len(orders),
            active=count(TaskStatus.OPEN.value) + count(TaskStatus.IN_PROGRESS.value),
            open=count(TaskStatus.OPEN.value),
            in_progress=count(TaskStatus.IN_PROGRESS.value),
            on_hold=count(TaskStatus.ON_HOLD.value),
            completed=count(TaskStatus.COMPLETED.value),
            high_priority=sum(1 for o in orders if o.priority == TaskPriority.HIGH.value),
            avg_completion_time=round(sum(durations) / len(durations), 1) if durations else 0.0,
        )

    # ============== 设备与供应商 ==============

    @service_call("load equipment", default=list)
    async def get_all_equipment(self) -> List[Equipment]:
        rows = await self._fetch_rows(EQUIPMENT_FIELDS.query(), "load equipment",
                                      table=EQUIPMENT_FIELDS.table)
        return [Equipment(**EQUIPMENT_FIELDS.from_record(r)) for r in rows]

    @service_call("load vendors", default=list)
    async def get_all_vendors(self) -> List[Vendor]:
        rows = await self._fetch_rows(VENDOR_FIELDS.query(), "load vendors",
                                      table=VENDOR_FIELDS.table)
        return [Vendor(**VENDOR_FIELDS.from_record(r)) for r in rows]
