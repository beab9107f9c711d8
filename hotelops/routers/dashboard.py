"""
仪表盘与报表路由
"""
from fastapi import APIRouter, Depends

from hotelops.dependencies import get_container, to_ui_list
from hotelops.models.schemas import ReportRequest
from hotelops.services.container import ServiceContainer

router = APIRouter(prefix="/dashboard", tags=["仪表盘"])


@router.get("/overview")
async def get_overview(container: ServiceContainer = Depends(get_container)):
    """仪表盘总览"""
    return (await container.dashboard.get_dashboard_overview()).to_ui()


@router.get("/kpi")
async def get_kpi_metrics(container: ServiceContainer = Depends(get_container)):
    """KPI 指标"""
    return to_ui_list(await container.dashboard.get_kpi_metrics())


@router.get("/activities")
async def get_activities(container: ServiceContainer = Depends(get_container)):
    """最近动态"""
    return to_ui_list(await container.dashboard.get_activities())


@router.get("/notifications")
async def get_notifications(container: ServiceContainer = Depends(get_container)):
    """通知列表"""
    return to_ui_list(await container.dashboard.get_notifications())


@router.post("/notifications/{notification_id}/dismiss")
async def dismiss_notification(notification_id: int, container: ServiceContainer = Depends(get_container)):
    """标记通知已读"""
    return await container.dashboard.dismiss_notification(notification_id)


@router.get("/charts")
async def get_chart_data(container: ServiceContainer = Depends(get_container)):
    """收入图表"""
    return (await container.dashboard.get_chart_data()).to_ui()


@router.post("/reports")
async def get_report(data: ReportRequest, container: ServiceContainer = Depends(get_container)):
    """汇总报表"""
    return await container.dashboard.get_report_data(data.metrics, data.date_range, data.filters)


@router.post("/reports/detailed")
async def get_detailed_report(data: ReportRequest, container: ServiceContainer = Depends(get_container)):
    """明细报表"""
    return to_ui_list(
        await container.dashboard.get_detailed_report_data(data.metrics, data.date_range, data.filters)
    )
