"""
清洁任务服务
清洁任务存放在 work_order_c 表（category_c = 'housekeeping'），
员工与房间信息分别委托 StaffService / RoomService 查询
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from core.records import Condition, OrderBy, RecordNotFoundError, SortType
from hotelops.models.enums import HOUSEKEEPING_CATEGORY, TaskStatus
from hotelops.models.fields import HOUSEKEEPING_TASK_FIELDS
from hotelops.models.schemas import (
    BulkAssignment, HousekeepingStats, HousekeepingTask, HousekeepingTaskCreate,
    Staff, StaffAssignmentStats,
)
from hotelops.services.base import CLIENT_UNAVAILABLE, RecordService, now_iso, service_call
from hotelops.services.room_service import RoomNotFoundError, RoomService
from hotelops.services.staff_service import StaffService

logger = logging.getLogger(__name__)

AVAILABLE_STAFF_STATUSES = {"active", "available"}


class TaskNotFoundError(RecordNotFoundError):
    entity = "Task"


def _is_today(value: Optional[str]) -> bool:
    if not value:
        return False
    return str(value)[:10] == date.today().isoformat()


class HousekeepingService(RecordService):
    """清洁任务服务"""

    fields = HOUSEKEEPING_TASK_FIELDS

    def __init__(self, client, notifier, room_service: RoomService,
                 staff_service: StaffService, settings=None):
        super().__init__(client, notifier, settings)
        self.rooms = room_service
        self.staff = staff_service

    def _category_filter(self) -> Condition:
        return Condition(self.fields.column("category"), values=[HOUSEKEEPING_CATEGORY])

    def _to_task(self, record, attrs=None) -> HousekeepingTask:
        return HousekeepingTask(**self.fields.from_record(record, attrs))

    # ============== 任务查询 ==============

    @service_call("fetch housekeeping tasks", default=list)
    async def get_all_tasks(self) -> List[HousekeepingTask]:
        """全部清洁任务，按创建时间倒序"""
        query = self.fields.query(
            where=[self._category_filter()],
            order_by=[OrderBy(self.fields.column("created_at"), SortType.DESC)],
        )
        rows = await self._fetch_rows(query, "fetch housekeeping tasks")
        return [self._to_task(r) for r in rows]

    @service_call("fetch tasks by status", default=list)
    async def get_tasks_by_status(self, status: str) -> List[HousekeepingTask]:
        attrs = ["title", "priority", "status", "room_number", "assigned_staff"]
        query = self.fields.query(
            attrs=attrs,
            where=[
                self._category_filter(),
                Condition(self.fields.column("status"), values=[status]),
            ],
        )
        rows = await self._fetch_rows(query, "fetch tasks by status")
        return [self._to_task(r, attrs) for r in rows]

    async def get_task_by_id(self, task_id: int) -> HousekeepingTask:
        """获取单个任务，不存在时抛出 TaskNotFoundError"""
        if self.client is None:
            self.notifier.error(CLIENT_UNAVAILABLE)
            raise TaskNotFoundError(task_id)
        row = await self._get_row(int(task_id), f"fetch task {task_id}", notify=False)
        if not row:
            raise TaskNotFoundError(task_id)
        return self._to_task(row)

    # ============== 任务操作 ==============

    @service_call("create task")
    async def create_task(self, data: HousekeepingTaskCreate) -> Optional[HousekeepingTask]:
        """创建清洁任务（状态 open，记录创建人和创建时间）"""
        values: Dict[str, Any] = {
            "title": data.title or "Housekeeping Task",
            "description": data.description,
            "priority": data.priority or "medium",
            "status": TaskStatus.OPEN.value,
            "category": HOUSEKEEPING_CATEGORY,
            "room_number": data.room_number,
            "room_id": data.room_id,
            "created_by": self.acting_user,
            "created_at": now_iso(),
        }
        if data.estimated_time is not None:
            values["estimated_time"] = data.estimated_time
        record = self.fields.to_record(values, partial=True)
        outcome = await self._write("create", [record], "create task")
        if not outcome.records:
            return None
        self.notifier.success("Task created successfully")
        return self._to_task(outcome.records[0])

    @service_call("update task status")
    async def update_task_status(self, task_id: int, status: str,
                                 updates: Optional[Dict[str, Any]] = None) -> Optional[HousekeepingTask]:
        """
        变更任务状态

        Args:
            task_id: 任务 ID
            status: 新状态
            updates: 同时写入的其他字段（UI 属性名）
        """
        values: Dict[str, Any] = {"status": status, "updated_at": now_iso()}
        values.update(updates or {})
        if status == TaskStatus.IN_PROGRESS.value:
            values["start_time"] = now_iso()
        elif status == TaskStatus.COMPLETED.value:
            values["completed_time"] = now_iso()

        record = self.fields.to_record(values, partial=True, record_id=int(task_id))
        outcome = await self._write("update", [record], "update task status")
        if not outcome.records:
            return None
        self.notifier.success(f"Task {status.replace('_', ' ')}")
        return self._to_task(outcome.records[0])

    @service_call("assign task")
    async def assign_task(self, task_id: int, staff_id: int) -> Optional[HousekeepingTask]:
        """指派任务给员工；员工不存在时提示并返回 None"""
        member = await self.get_staff_by_id(staff_id)
        if member is None:
            raise ValueError(f"Staff member with ID {staff_id} not found")
        return await self.update_task_status(task_id, TaskStatus.ASSIGNED.value, {
            "assigned_to": int(staff_id),
            "assigned_staff": member.name,
        })

    @service_call("assign tasks", default=list)
    async def bulk_assign_tasks(self, assignments: Sequence[BulkAssignment]) -> List[HousekeepingTask]:
        """每个房间创建一条任务并指派给对应员工"""
        assigned = []
        for assignment in assignments:
            for room_id in assignment.room_ids:
                try:
                    room = await self.rooms.get_by_id(room_id)
                except RoomNotFoundError as e:
                    logger.warning(f"Skipping bulk assignment: {e}")
                    self.notifier.error(str(e))
                    continue

                task = await self.create_task(HousekeepingTaskCreate(
                    title=f"Housekeeping - Room {room.room_number}",
                    description=assignment.special_instructions or "Standard cleaning",
                    room_number=room.room_number,
                    room_id=room.id,
                    priority=assignment.priority or "medium",
                ))
                if task is None:
                    continue
                updated = await self.assign_task(task.id, assignment.staff_id)
                assigned.append(updated or task)

        self.notifier.success(f"{len(assigned)} tasks assigned successfully")
        return assigned

    @service_call("delete task", default=False)
    async def delete_task(self, task_id: int) -> bool:
        deleted = await self._delete_ids([int(task_id)], "delete task", require_results=False)
        if deleted:
            self.notifier.success("Task deleted successfully")
        return deleted

    # ============== 员工（委托 StaffService） ==============

    async def get_all_staff(self) -> List[Staff]:
        return await self.staff.get_all()

    async def get_available_staff(self) -> List[Staff]:
        """状态为 Active 或 Available 的员工"""
        members = await self.staff.get_all()
        return [m for m in members if (m.status or "").lower() in AVAILABLE_STAFF_STATUSES]

    async def get_staff_by_id(self, staff_id: int) -> Optional[Staff]:
        return await self.staff.get_by_id(staff_id)

    # ============== 统计 ==============

    @service_call("fetch housekeeping stats", default=HousekeepingStats)
    async def get_housekeeping_stats(self) -> HousekeepingStats:
        tasks = await self.get_all_tasks()

        timed = [t.actual_time for t in tasks if t.actual_time]
        average_time = round(sum(timed) / len(timed)) if timed else 0

        active_statuses = {TaskStatus.ASSIGNED.value, TaskStatus.IN_PROGRESS.value}
        staff_stats = []
        for member in await self.get_all_staff():
            own = [t for t in tasks if t.assigned_to == member.id]
            staff_stats.append(StaffAssignmentStats(
                staff_id=member.id,
                name=member.name,
                status=member.status,
                active_assignments=sum(1 for t in own if t.status in active_statuses),
                completed_today=sum(
                    1 for t in own
                    if t.status == TaskStatus.COMPLETED.value and _is_today(t.completed_time)
                ),
            ))

        return HousekeepingStats(
            total_tasks=len(tasks),
            pending_tasks=sum(1 for t in tasks if t.status == TaskStatus.OPEN.value),
            in_progress_tasks=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS.value),
            completed_today=sum(
                1 for t in tasks
                if t.status == TaskStatus.COMPLETED.value and _is_today(t.completed_time)
            ),
            average_time=average_time,
            staff_stats=staff_stats,
        )
