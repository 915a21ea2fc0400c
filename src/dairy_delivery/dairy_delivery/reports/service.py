from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_cls
from typing import List, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import current_month, month_prefix
from ..customers.repository import CustomerRepository
from ..deliveries.repository import DeliveryRepository
from ..members.repository import MemberRepository
from ..prices.service import PriceService
from . import aggregation
from .aggregation import MonthlyReportItem, ProductStats, RevenueBreakdown, TeamMemberStats


@dataclass(frozen=True)
class DashboardStats:
    total_customers: int
    active_customers: int
    total_products: int
    total_members: int
    monthly_revenue: float

    def to_dict(self) -> dict:
        return {
            "totalCustomers": self.total_customers,
            "activeCustomers": self.active_customers,
            "totalProducts": self.total_products,
            "totalMembers": self.total_members,
            "monthlyRevenue": self.monthly_revenue,
        }


class ReportService:
    """Fetches the records a report needs and hands them to the aggregation module."""

    def __init__(
        self,
        customers: CustomerRepository,
        members: MemberRepository,
        prices: PriceService,
        deliveries: DeliveryRepository,
        attendance: AttendanceRepository,
    ):
        self._customers = customers
        self._members = members
        self._prices = prices
        self._deliveries = deliveries
        self._attendance = attendance

    def monthly_report(self, month: int, year: int) -> List[MonthlyReportItem]:
        prefix = month_prefix(month, year)
        return aggregation.monthly_report(
            self._customers.list_all(),
            self._deliveries.find(date_prefix=prefix),
            self._prices.price_map(),
            date_prefix=prefix,
        )

    def revenue_breakdown(self, month: int, year: int) -> RevenueBreakdown:
        customers = self._customers.list_all()
        prefix = month_prefix(month, year)
        report = aggregation.monthly_report(
            customers, self._deliveries.find(date_prefix=prefix), self._prices.price_map(), date_prefix=prefix
        )
        return aggregation.revenue_breakdown(report, customers, self._members.list_all())

    def product_statistics(self, month: int, year: int) -> List[ProductStats]:
        customers = self._customers.list_all()
        prefix = month_prefix(month, year)
        report = aggregation.monthly_report(
            customers, self._deliveries.find(date_prefix=prefix), self._prices.price_map(), date_prefix=prefix
        )
        return aggregation.product_statistics(report, customers)

    def dashboard(self, *, today: Optional[date_cls] = None) -> DashboardStats:
        customers = self._customers.list_all()
        month, year = current_month(today)
        prefix = month_prefix(month, year)
        return DashboardStats(
            total_customers=len(customers),
            active_customers=sum(1 for c in customers if c.is_active),
            total_products=len(self._prices.list_prices()),
            total_members=len(self._members.list_all()),
            monthly_revenue=aggregation.attendance_revenue(self._attendance.find(date_prefix=prefix), prefix),
        )

    def team_statistics(self, day: str, *, today: Optional[date_cls] = None) -> Sequence[TeamMemberStats]:
        month, year = current_month(today)
        return aggregation.team_statistics(
            self._members.list_all(),
            self._customers.list_all(),
            self._deliveries.find(date=day),
            self._deliveries.find(date_prefix=month_prefix(month, year)),
        )

    def assignments(self) -> List[dict]:
        return aggregation.customers_by_member(self._members.list_all(), self._customers.list_all())
