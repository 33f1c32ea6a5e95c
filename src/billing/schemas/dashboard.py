from src.billing.schemas.base import CamelModel, Money


class DashboardStats(CamelModel):
    total_receivable: Money
    total_received: Money
    total_overdue: Money
    overdue_count: int
    payment_rate: float
    month: int
    year: int
