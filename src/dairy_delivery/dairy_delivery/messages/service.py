from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_timestamp_id
from ..common.validators import require_enum, require_list, require_mapping, resolve_month
from ..core.constants import BUSINESS_NAME, MONTH_NAMES
from ..core.enums import MessageChannel, MessageStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..reports.service import ReportService
from .model import MessageLog
from .repository import MessageLogRepository
from .sender import MessageSender


def generate_bill_message(customer_name: str, month_year: str, liters: float, amount: float) -> str:
    return (
        f"Hello {customer_name},\n"
        f"Milk Bill for {month_year}\n"
        "\n"
        f"Total Milk: {liters:.2f} L\n"
        f"Amount: \u20b9{amount:.2f}\n"
        "\n"
        "Thank you,\n"
        f"{BUSINESS_NAME}"
    )


def month_label(month: int, year: int) -> str:
    return f"{MONTH_NAMES[month]} {year}"


class BillingMessageService:
    """Use case: send monthly bills and keep a log of every attempt."""

    def __init__(self, logs: MessageLogRepository, reports: ReportService, sender: MessageSender):
        self._logs = logs
        self._reports = reports
        self._sender = sender

    def list_logs(self, *, month: Any, year: Any, customer_id: Optional[str] = None) -> Sequence[MessageLog]:
        m, y = resolve_month(month, year)
        return self._logs.find(month=m, year=y, customer_id=customer_id or None)

    def send_bills(self, payload: Mapping[str, Any]) -> List[MessageLog]:
        payload = require_mapping(payload, "request")
        month, year = resolve_month(payload.get("month"), payload.get("year"))

        channels = [
            require_enum(c, MessageChannel, "channels")
            for c in require_list(payload.get("channels", [MessageChannel.SMS.value]), "channels")
        ]
        if not channels:
            raise ValidationError("At least one channel must be selected")

        report = self._reports.monthly_report(month, year)
        targets = self._select_targets(report, payload.get("customerIds"))

        created: List[MessageLog] = []
        label = month_label(month, year)
        for item in targets:
            message = generate_bill_message(item.customer_name, label, item.total_liters, item.total_amount)
            for channel in channels:
                ok = self._sender.send(item.customer_id, channel, message)
                log = MessageLog(
                    id=new_timestamp_id(),
                    customer_id=item.customer_id,
                    month=month,
                    year=year,
                    channel=channel,
                    status=MessageStatus.SENT if ok else MessageStatus.FAILED,
                    timestamp=now_local(),
                )
                self._logs.create(log)
                created.append(log)
        return created

    @staticmethod
    def _select_targets(report: Iterable, customer_ids: Any) -> list:
        report = list(report)
        if customer_ids is None:
            return report

        wanted = [str(c) for c in require_list(customer_ids, "customerIds")]
        by_id = {item.customer_id: item for item in report}
        missing = [c for c in wanted if c not in by_id]
        if missing:
            raise NotFoundError(f"Customer not found: {', '.join(map(str, missing))}")
        return [by_id[c] for c in wanted]
