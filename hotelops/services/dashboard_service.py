"""
仪表盘聚合服务

把 KPI、动态、通知、收入图表以及各实体服务的统计组合成总览或临时报表。
各实体服务通过 ServiceContainer 按需创建；单个数据源失败只影响自身，
对应部分回落为 0 或空列表。
"""
import asyncio
import copy
import logging
import random
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from core.records import OrderBy, SortType
from hotelops.models.fields import ACTIVITY_FIELDS
from hotelops.models.schemas import (
    Activity, ChartData, DashboardNotification, DashboardOverview, DateRange, KPIMetric,
    ReportFilters, ReportRow,
)
from hotelops.services.base import RecordService, now_iso, service_call
from hotelops.services.sample_data import CHART_DATA, KPI_METRICS, NOTIFICATIONS

if TYPE_CHECKING:
    from hotelops.services.container import ServiceContainer

logger = logging.getLogger(__name__)

ACTIVITY_PREVIEW = 10
NOTIFICATION_PREVIEW = 8

# 小数展示的 KPI 单位，其余取整
DECIMAL_UNITS = {"%", "rating"}


class DashboardService(RecordService):
    """仪表盘服务"""

    fields = ACTIVITY_FIELDS

    def __init__(self, client, notifier, services: "ServiceContainer",
                 settings=None, rng: Optional[random.Random] = None):
        super().__init__(client, notifier, settings)
        self.services = services
        self.rng = rng or random.Random()
        self._notifications = copy.deepcopy(NOTIFICATIONS)

    def _fluctuate(self, value: float, percentage: float) -> float:
        """在 ±percentage 范围内随机波动，结果不小于 0"""
        delta = (self.rng.random() - 0.5) * 2 * percentage
        return max(0.0, value * (1 + delta))

    # ============== 数据源 ==============

    async def get_kpi_metrics(self) -> List[KPIMetric]:
        """KPI 指标（百分比与评分 ±5% 保留一位小数，其余 ±8% 取整）"""
        stamp = now_iso()
        metrics = []
        for metric in KPI_METRICS:
            if metric["unit"] in DECIMAL_UNITS:
                value = round(self._fluctuate(metric["value"], 0.05), 1)
            else:
                value = round(self._fluctuate(metric["value"], 0.08))
            metrics.append(KPIMetric(**{**metric, "value": value, "last_updated": stamp}))
        return metrics

    @service_call("fetch activities", default=list)
    async def get_activities(self) -> List[Activity]:
        """最近动态，按时间倒序"""
        query = self.fields.query(order_by=[OrderBy(self.fields.column("timestamp"), SortType.DESC)])
        rows = await self._fetch_rows(query, "fetch activities")
        return [Activity(**self.fields.from_record(r)) for r in rows]

    async def get_notifications(self) -> List[DashboardNotification]:
        """通知副本，最新的在前"""
        ordered = sorted(self._notifications, key=lambda n: n["timestamp"], reverse=True)
        return [DashboardNotification(**n) for n in ordered]

    async def dismiss_notification(self, notification_id: int) -> Dict[str, Any]:
        for notification in self._notifications:
            if notification["Id"] == notification_id:
                notification["read"] = True
                break
        return {"success": True}

    async def get_chart_data(self) -> ChartData:
        """收入图表；日图最后一个点 ±5% 波动并重算合计"""
        chart = copy.deepcopy(CHART_DATA)
        daily = chart["daily"]["data"]
        daily[-1]["value"] = round(self._fluctuate(daily[-1]["value"], 0.05))
        chart["daily"]["total"] = sum(point["value"] for point in daily)
        return ChartData(**chart)

    # ============== 总览 ==============

    async def get_dashboard_overview(self) -> DashboardOverview:
        """四个数据源并发获取，再附加今日支付收入（失败时为 0）"""
        kpi_metrics, activities, notifications, chart_data = await asyncio.gather(
            self.get_kpi_metrics(),
            self.get_activities(),
            self.get_notifications(),
            self.get_chart_data(),
        )

        payment_revenue = 0.0
        try:
            stats = await self.services.payments.get_stats()
            payment_revenue = stats.todays_revenue or 0.0
        except Exception as e:
            logger.warning(f"Payment revenue unavailable for dashboard: {e}")

        return DashboardOverview(
            kpi_metrics=kpi_metrics,
            activities=activities[:ACTIVITY_PREVIEW],
            notifications=notifications[:NOTIFICATION_PREVIEW],
            chart_data=chart_data,
            payment_revenue=payment_revenue,
            last_updated=now_iso(),
        )

    # ============== 报表 ==============

    async def _total_revenue(self, date_range: Optional[DateRange]) -> float:
        stats = await self.services.payments.get_stats(date_range)
        return stats.total_revenue

    async def _occupancy_rate(self, date_range: Optional[DateRange]) -> float:
        stats = await self.services.rooms.get_room_stats()
        if not stats.total:
            return 0
        return round(stats.occupied / stats.total * 100)

    async def _maintenance_requests(self, date_range: Optional[DateRange]) -> int:
        stats = await self.services.maintenance.get_maintenance_stats()
        return stats.total

    async def _staff_performance(self, date_range: Optional[DateRange]) -> float:
        performance = await self.services.staff.get_staff_performance()
        if not performance:
            return 0.0
        return round(sum(p.productivity for p in performance) / len(performance), 1)

    REPORT_METRICS = {
        "total_revenue": ("totalRevenue", "_total_revenue"),
        "occupancy_rate": ("occupancyRate", "_occupancy_rate"),
        "maintenance_requests": ("maintenanceRequests", "_maintenance_requests"),
        "staff_performance": ("staffPerformance", "_staff_performance"),
    }

    async def get_report_data(self, metrics: List[str], date_range: Optional[DateRange] = None,
                              filters: Optional[ReportFilters] = None) -> Dict[str, Any]:
        """
        按指标名逐个汇总

        每个指标独立取数，失败的指标记为 0，不影响其他指标；
        未知指标记为 0 并写警告日志。
        """
        report: Dict[str, Any] = {}
        for metric in metrics:
            entry = self.REPORT_METRICS.get(metric)
            if entry is None:
                logger.warning(f"Unknown report metric: {metric}")
                report[metric] = 0
                continue

            key, method = entry
            try:
                report[key] = await getattr(self, method)(date_range)
            except Exception as e:
                logger.error(f"Failed to collect report metric {metric}: {e}", exc_info=True)
                report[key] = 0
        return report

    async def get_detailed_report_data(self, metrics: List[str], date_range: Optional[DateRange] = None,
                                       filters: Optional[ReportFilters] = None) -> List[ReportRow]:
        """预订明细与支付明细拼接为一个列表，每行带 type 标记"""
        rows: List[ReportRow] = []
        if "bookings_detail" in metrics:
            try:
                for booking in await self.services.bookings.get_all():
                    rows.append(ReportRow(
                        type="Booking",
                        id=booking.id,
                        guest=booking.guest_name,
                        room=booking.room_number,
                        amount=booking.total_amount,
                        status=booking.status,
                        date=booking.check_in_date,
                    ))
            except Exception as e:
                logger.error(f"Error collecting booking report rows: {e}", exc_info=True)

        if "payments_detail" in metrics:
            try:
                for payment in await self.services.payments.get_all():
                    rows.append(ReportRow(
                        type="Payment",
                        id=payment.id,
                        amount=payment.amount,
                        method=payment.method,
                        status=payment.status,
                        date=payment.processed_at,
                    ))
            except Exception as e:
                logger.error(f"Error collecting payment report rows: {e}", exc_info=True)

        if date_range is not None:
            rows = [r for r in rows if date_range.contains(r.date)]
        if filters is not None and filters.status:
            wanted = filters.status.lower()
            rows = [r for r in rows if (r.status or "").lower() == wanted]
        return rows
