from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.memory_attendance_repository import MemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MILK_PRICE
from .customers.memory_customer_repository import MemoryCustomerRepository
from .customers.mysql_customer_repository import MySQLCustomerRepository
from .customers.repository import CustomerRepository
from .customers.service import CustomerService
from .database.connection import DBConfig, DatabaseConnection
from .deliveries.memory_delivery_repository import MemoryDeliveryRepository
from .deliveries.mysql_delivery_repository import MySQLDeliveryRepository
from .deliveries.repository import DeliveryRepository
from .deliveries.service import DeliveryService
from .members.memory_member_repository import MemoryMemberRepository
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .messages.memory_message_repository import MemoryMessageLogRepository
from .messages.mysql_message_repository import MySQLMessageLogRepository
from .messages.repository import MessageLogRepository
from .messages.sender import MessageSender, SimulatedSender
from .messages.service import BillingMessageService
from .prices.memory_price_repository import MemoryPriceRepository
from .prices.mysql_price_repository import MySQLPriceRepository
from .prices.repository import PriceRepository
from .prices.service import PriceService
from .reports.service import ReportService

BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    backend: str

    customers_repo: CustomerRepository
    members_repo: MemberRepository
    prices_repo: PriceRepository
    deliveries_repo: DeliveryRepository
    attendance_repo: AttendanceRepository
    messages_repo: MessageLogRepository

    customer_service: CustomerService
    member_service: MemberService
    price_service: PriceService
    delivery_service: DeliveryService
    attendance_service: AttendanceService
    report_service: ReportService
    message_service: BillingMessageService


def build_container(
    *,
    backend: str = "mysql",
    db_config: Optional[dict] = None,
    default_milk_price: float = DEFAULT_MILK_PRICE,
    message_failure_rate: float = 0.0,
    sender: Optional[MessageSender] = None,
) -> Container:
    if backend == "mysql":
        if not db_config:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        customers_repo = MySQLCustomerRepository(conn)
        members_repo = MySQLMemberRepository(conn)
        prices_repo = MySQLPriceRepository(conn)
        deliveries_repo = MySQLDeliveryRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        messages_repo = MySQLMessageLogRepository(conn)
    elif backend == "memory":
        customers_repo = MemoryCustomerRepository()
        members_repo = MemoryMemberRepository()
        prices_repo = MemoryPriceRepository()
        deliveries_repo = MemoryDeliveryRepository()
        attendance_repo = MemoryAttendanceRepository()
        messages_repo = MemoryMessageLogRepository()
    else:
        raise ValueError(f"Unknown storage backend {backend!r}; expected one of {BACKENDS}")

    price_service = PriceService(prices_repo)
    report_service = ReportService(customers_repo, members_repo, price_service, deliveries_repo, attendance_repo)

    return Container(
        backend=backend,
        customers_repo=customers_repo,
        members_repo=members_repo,
        prices_repo=prices_repo,
        deliveries_repo=deliveries_repo,
        attendance_repo=attendance_repo,
        messages_repo=messages_repo,
        customer_service=CustomerService(customers_repo),
        member_service=MemberService(members_repo),
        price_service=price_service,
        delivery_service=DeliveryService(deliveries_repo, customers_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            members_repo,
            customers_repo,
            price_service,
            default_milk_price=default_milk_price,
        ),
        report_service=report_service,
        message_service=BillingMessageService(
            messages_repo,
            report_service,
            sender or SimulatedSender(failure_rate=message_failure_rate),
        ),
    )
