"""Dashboard service - monthly billing figures for a tenant."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from uuid import UUID

from src.billing.models import ChargeStatus
from src.billing.repositories import ChargeRepository
from src.billing.repositories.tenant.charge import OPEN_STATUSES
from src.billing.services.charge_service import month_bounds


@dataclass(frozen=True)
class MonthlyStats:
    total_receivable: Decimal
    total_received: Decimal
    total_overdue: Decimal
    overdue_count: int
    payment_rate: float
    month: int
    year: int


class DashboardService:
    """Read-only aggregates over the tenant's charges."""

    def __init__(self, charge_repo: ChargeRepository, tenant_id: UUID):
        self.charge_repo = charge_repo
        self.tenant_id = tenant_id

    async def get_stats(self, month: int | None = None, year: int | None = None) -> MonthlyStats:
        """Compute figures for a month (defaults to the current one).

        - receivable: open charges due in the month
        - received: charges paid during the month
        - overdue: every charge currently OVERDUE, regardless of month
        - payment rate: share of the month's charges that are paid, in percent
        """
        today = date.today()
        month = month or today.month
        year = year or today.year
        first_day, last_day = month_bounds(year, month)
        paid_from = datetime.combine(first_day, time.min)
        paid_to = datetime.combine(last_day + timedelta(days=1), time.min)

        receivable, _ = await self.charge_repo.sum_and_count(
            self.tenant_id, statuses=OPEN_STATUSES, due_from=first_day, due_to=last_day
        )
        received, _ = await self.charge_repo.sum_and_count(
            self.tenant_id,
            statuses=[ChargeStatus.PAID.value],
            paid_from=paid_from,
            paid_to=paid_to,
        )
        overdue, overdue_count = await self.charge_repo.sum_and_count(
            self.tenant_id, statuses=[ChargeStatus.OVERDUE.value]
        )
        _, month_count = await self.charge_repo.sum_and_count(
            self.tenant_id, due_from=first_day, due_to=last_day
        )
        _, paid_count = await self.charge_repo.sum_and_count(
            self.tenant_id,
            statuses=[ChargeStatus.PAID.value],
            due_from=first_day,
            due_to=last_day,
        )

        payment_rate = round(paid_count / month_count * 100, 2) if month_count else 0.0
        return MonthlyStats(
            total_receivable=receivable,
            total_received=received,
            total_overdue=overdue,
            overdue_count=overdue_count,
            payment_rate=payment_rate,
            month=month,
            year=year,
        )
