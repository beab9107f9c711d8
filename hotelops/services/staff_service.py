"""
员工服务
staff_c 表的 CRUD；部门、排班、绩效为派生字段
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from hotelops.models.fields import STAFF_FIELDS
from hotelops.models.schemas import ScheduleDay, Staff, StaffCreate, StaffPerformance, StaffUpdate
from hotelops.services.base import RecordService, service_call

logger = logging.getLogger(__name__)

DEPARTMENTS = {
    "Front Desk": "Front Office",
    "Receptionist": "Front Office",
    "Concierge": "Front Office",
    "Housekeeping": "Housekeeping",
    "Room Attendant": "Housekeeping",
    "Housekeeper": "Housekeeping",
    "Maintenance": "Maintenance",
    "Engineer": "Maintenance",
    "Technician": "Maintenance",
    "Manager": "Management",
    "Supervisor": "Management",
    "Chef": "Food & Beverage",
    "Cook": "Food & Beverage",
    "Server": "Food & Beverage",
    "Bartender": "Food & Beverage",
}

SHIFT_TIMES = {
    "Morning": ("07:00", "15:00"),
    "Afternoon": ("15:00", "23:00"),
    "Night": ("23:00", "07:00"),
    "Day": ("09:00", "17:00"),
}

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
WORKDAYS = 5
SHIFT_HOURS = 8


def get_department(role: Optional[str]) -> str:
    """职位 -> 部门，未知职位归入 General"""
    return DEPARTMENTS.get(role or "", "General")


def generate_weekly_schedule(shift: Optional[str]) -> List[ScheduleDay]:
    """周一至周五上班（每天 8 小时），周末休息"""
    start, end = SHIFT_TIMES.get(shift or "", SHIFT_TIMES["Day"])
    schedule = []
    for index, day in enumerate(WEEKDAYS):
        workday = index < WORKDAYS
        schedule.append(ScheduleDay(
            day=day,
            is_workday=workday,
            start_time=start if workday else None,
            end_time=end if workday else None,
            hours=SHIFT_HOURS if workday else 0,
        ))
    return schedule


class StaffService(RecordService):
    """员工服务"""

    fields = STAFF_FIELDS

    get_department = staticmethod(get_department)
    generate_weekly_schedule = staticmethod(generate_weekly_schedule)

    def _to_staff(self, record: Dict[str, Any]) -> Staff:
        data = self.fields.from_record(record)
        schedule = generate_weekly_schedule(data.get("shift"))
        return Staff(
            **data,
            department=get_department(data.get("role")),
            schedule=schedule,
            weekly_hours=sum(day.hours for day in schedule),
        )

    @service_call("fetch staff", default=list)
    async def get_all(self) -> List[Staff]:
        """获取全部员工"""
        rows = await self._fetch_rows(self.fields.query(), "fetch staff")
        return [self._to_staff(r) for r in rows]

    @service_call("fetch staff member")
    async def get_by_id(self, staff_id: int) -> Optional[Staff]:
        row = await self._get_row(staff_id, f"fetch staff member {staff_id}", notify=False)
        return self._to_staff(row) if row else None

    @service_call("create staff member")
    async def create(self, data: StaffCreate) -> Optional[Staff]:
        """创建员工，入职日期缺省为今天"""
        values = data.model_dump()
        values["status"] = values.get("status") or "Active"
        values["hire_date"] = values.get("hire_date") or date.today().isoformat()
        record = self.fields.to_record(values, partial=True)
        outcome = await self._write("create", [record], "create staff member")
        if not outcome.records:
            return None
        self.notifier.success(f"{data.name} added to staff")
        return self._to_staff(outcome.records[0])

    @service_call("update staff member")
    async def update(self, staff_id: int, data: StaffUpdate) -> Optional[Staff]:
        record = self.fields.to_record(
            data.model_dump(exclude_unset=True), partial=True, record_id=staff_id
        )
        outcome = await self._write("update", [record], "update staff member")
        if not outcome.ok or not outcome.records:
            return None
        self.notifier.success("Staff member updated successfully")
        return self._to_staff(outcome.records[0])

    @service_call("delete staff member", default=False)
    async def delete(self, staff_id: int) -> bool:
        deleted = await self._delete_ids([staff_id], "delete staff member")
        if deleted:
            self.notifier.success("Staff member deleted successfully")
        return deleted

    @service_call("fetch staff performance", default=list)
    async def get_staff_performance(self) -> List[StaffPerformance]:
        """
        员工绩效

        productivity = hoursWorked / weeklyHours * 100，上限 100，保留一位小数
        """
        performance = []
        for member in await self.get_all():
            productivity = 0.0
            if member.weekly_hours:
                productivity = round(min(100.0, member.hours_worked / member.weekly_hours * 100), 1)
            performance.append(StaffPerformance(
                staff_id=member.id,
                name=member.name,
                department=member.department,
                hours_worked=member.hours_worked,
                weekly_hours=member.weekly_hours,
                productivity=productivity,
            ))
        return performance
