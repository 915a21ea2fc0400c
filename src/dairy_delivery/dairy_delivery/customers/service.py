from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import today_iso
from ..common.ids import new_timestamp_id
from ..common.validators import (
    optional_str,
    require_bool,
    require_enum,
    require_iso_date,
    require_list,
    require_mapping,
    require_non_empty,
    require_number,
)
from ..core.constants import DEFAULT_SHIFT
from ..core.enums import DeliveryShift
from ..core.exceptions import NotFoundError, ValidationError
from .model import Customer, Subscription
from .repository import CustomerRepository

logger = logging.getLogger(__name__)

# Payload key -> dataclass field for partial updates.
_UPDATABLE_FIELDS = {
    "name": "name",
    "address": "address",
    "mobile": "mobile",
    "subscriptions": "subscriptions",
    "joinDate": "join_date",
    "isActive": "is_active",
    "assignedTo": "assigned_to",
    "deliveryShift": "delivery_shift",
}


def parse_subscriptions(value: Any) -> tuple[Subscription, ...]:
    out = []
    for i, raw in enumerate(require_list(value, "subscriptions")):
        raw = require_mapping(raw, f"subscriptions[{i}]")
        out.append(
            Subscription(
                product=require_non_empty(raw.get("product"), f"subscriptions[{i}].product"),
                quantity=require_number(raw.get("quantity"), f"subscriptions[{i}].quantity", min_value=0),
            )
        )
    return tuple(out)


def parse_delivery_shift(value: Any) -> tuple[str, ...]:
    shifts = require_list(value, "deliveryShift")
    if not shifts:
        raise ValidationError("At least one delivery shift must be selected")
    parsed: list[str] = []
    for s in shifts:
        shift = require_enum(s, DeliveryShift, "deliveryShift").value
        if shift not in parsed:
            parsed.append(shift)
    return tuple(parsed)


def _coerce_field(field_name: str, value: Any) -> Any:
    if field_name in ("name", "address", "mobile"):
        return require_non_empty(value, field_name)
    if field_name == "subscriptions":
        return parse_subscriptions(value)
    if field_name == "join_date":
        return require_iso_date(value, "joinDate")
    if field_name == "is_active":
        return require_bool(value, "isActive")
    if field_name == "assigned_to":
        return optional_str(value, "assignedTo")
    if field_name == "delivery_shift":
        return parse_delivery_shift(value)
    raise ValidationError(f"Unknown field {field_name}")


class CustomerService:
    """Use case: manage customers and their subscriptions."""

    def __init__(self, customers: CustomerRepository):
        self._customers = customers

    def list_customers(self) -> Sequence[Customer]:
        return self._customers.list_all()

    def get_customer(self, customer_id: str) -> Customer:
        customer = self._customers.get_by_id(customer_id)
        if not customer:
            raise NotFoundError("Customer not found")
        return customer

    def create_customer(self, payload: Mapping[str, Any]) -> Customer:
        payload = require_mapping(payload, "customer")
        customer_id = optional_str(payload.get("id"), "id") or new_timestamp_id()

        customer = Customer(
            id=customer_id,
            name=require_non_empty(payload.get("name"), "name"),
            address=require_non_empty(payload.get("address"), "address"),
            mobile=require_non_empty(payload.get("mobile"), "mobile"),
            join_date=require_iso_date(payload.get("joinDate") or today_iso(), "joinDate"),
            subscriptions=parse_subscriptions(payload.get("subscriptions", [])),
            is_active=require_bool(payload.get("isActive", True), "isActive"),
            assigned_to=optional_str(payload.get("assignedTo"), "assignedTo"),
            delivery_shift=parse_delivery_shift(payload.get("deliveryShift", [DEFAULT_SHIFT])),
        )
        self._customers.create(customer)
        logger.info("Created customer %s (%s)", customer.id, customer.name)
        return customer

    def update_customer(self, customer_id: str, payload: Mapping[str, Any]) -> Customer:
        payload = require_mapping(payload, "customer")
        current = self.get_customer(customer_id)

        changes = {
            field_name: _coerce_field(field_name, payload[key])
            for key, field_name in _UPDATABLE_FIELDS.items()
            if key in payload
        }
        updated = replace(current, **changes)

        if not self._customers.update(updated):
            raise NotFoundError("Customer not found")
        logger.info("Updated customer %s fields=%s", customer_id, sorted(changes))
        return updated
