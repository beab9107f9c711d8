"""
支付服务
payment_c 表的 CRUD、未付款预订、收入统计
"""
import logging
from collections import defaultdict
from datetime import date
from typing import List, Optional

from core.records import Condition, OrderBy, SortType
from hotelops.models.enums import PaymentStatus
from hotelops.models.fields import BOOKING_FIELDS, PAYMENT_FIELDS
from hotelops.models.schemas import (
    Booking, DateRange, Payment, PaymentCreate, PaymentStats, PaymentUpdate,
)
from hotelops.services.base import RecordService, service_call

logger = logging.getLogger(__name__)

UNPAID = "Unpaid"


class PaymentService(RecordService):
    """支付服务"""

    fields = PAYMENT_FIELDS

    def _to_payment(self, record) -> Payment:
        return Payment(**self.fields.from_record(record))

    @service_call("fetch payments", default=list)
    async def get_all(self) -> List[Payment]:
        """全部支付记录，按 ID 倒序"""
        query = self.fields.query(order_by=[OrderBy(self.fields.id_column, SortType.DESC)])
        rows = await self._fetch_rows(query, "fetch payments")
        return [self._to_payment(r) for r in rows]

    @service_call("fetch payment")
    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        row = await self._get_row(payment_id, f"fetch payment {payment_id}", notify=False)
        return self._to_payment(row) if row else None

    @service_call("create payment")
    async def create(self, data: PaymentCreate) -> Optional[Payment]:
        record = self.fields.to_record(data.model_dump(), partial=True)
        outcome = await self._write("create", [record], "create payment")
        if not outcome.records:
            return None
        self.notifier.success("Payment recorded successfully")
        return self._to_payment(outcome.records[0])

    @service_call("update payment")
    async def update(self, payment_id: int, data: PaymentUpdate) -> Optional[Payment]:
        record = self.fields.to_record(
            data.model_dump(exclude_unset=True), partial=True, record_id=payment_id
        )
        outcome = await self._write("update", [record], f"update payment {payment_id}")
        if not outcome.ok or not outcome.records:
            return None
        self.notifier.success("Payment updated successfully")
        return self._to_payment(outcome.records[0])

    @service_call("delete payment", default=False)
    async def delete(self, payment_id: int) -> bool:
        deleted = await self._delete_ids([payment_id], f"delete payment {payment_id}")
        if deleted:
            self.notifier.success("Payment deleted successfully")
        return deleted

    @service_call("fetch unpaid bookings", default=list)
    async def get_unpaid_bookings(self) -> List[Booking]:
        """payment_status_c 为 Unpaid 的预订"""
        attrs = ["guest_name", "total_amount", "payment_status"]
        query = BOOKING_FIELDS.query(
            attrs=attrs,
            where=[Condition(BOOKING_FIELDS.column("payment_status"), values=[UNPAID])],
        )
        rows = await self._fetch_rows(query, "fetch unpaid bookings", table=BOOKING_FIELDS.table)
        return [Booking(**BOOKING_FIELDS.from_record(r, attrs)) for r in rows]

    @service_call("fetch payment stats", default=PaymentStats)
    async def get_stats(self, date_range: Optional[DateRange] = None) -> PaymentStats:
        """
        收入统计

        只有状态为 Completed 的支付计入收入；
        date_range 按 processedAt 过滤参与统计的支付记录。
        """
        payments = await self.get_all()
        if date_range is not None:
            payments = [p for p in payments if date_range.contains(p.processed_at)]

        def has_status(payment: Payment, status: PaymentStatus) -> bool:
            return (payment.status or "").lower() == status.value.lower()

        completed = [p for p in payments if has_status(p, PaymentStatus.COMPLETED)]
        today = date.today().isoformat()
        by_method = defaultdict(float)
        for payment in completed:
            by_method[payment.method or "Other"] += payment.amount

        return PaymentStats(
            total_revenue=round(sum(p.amount for p in completed), 2),
            todays_revenue=round(sum(
                p.amount for p in completed if (p.processed_at or "")[:10] == today
            ), 2),
            total_payments=len(payments),
            completed_payments=len(completed),
            pending_payments=sum(1 for p in payments if has_status(p, PaymentStatus.PENDING)),
            failed_payments=sum(1 for p in payments if has_status(p, PaymentStatus.FAILED)),
            by_method=dict(by_method),
        )
