from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Sequence

from ..common.ids import new_timestamp_id
from ..common.validators import optional_str, require_bool, require_enum, require_mapping, require_non_empty
from ..core.enums import MemberShift
from ..core.exceptions import NotFoundError
from .model import DeliveryMember
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService:
    """Use case: manage delivery members.

    Deactivating a member does not touch the customers assigned to them.
    """

    def __init__(self, members: MemberRepository):
        self._members = members

    def list_members(self) -> Sequence[DeliveryMember]:
        return self._members.list_all()

    def get_member(self, member_id: str) -> DeliveryMember:
        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return member

    def create_member(self, payload: Mapping[str, Any]) -> DeliveryMember:
        payload = require_mapping(payload, "member")
        member = DeliveryMember(
            id=optional_str(payload.get("id"), "id") or new_timestamp_id(),
            name=require_non_empty(payload.get("name"), "name"),
            mobile=require_non_empty(payload.get("mobile"), "mobile"),
            route=optional_str(payload.get("route"), "route") or "",
            shift=require_enum(payload.get("shift", MemberShift.MORNING.value), MemberShift, "shift"),
            is_active=require_bool(payload.get("isActive", True), "isActive"),
        )
        self._members.create(member)
        logger.info("Created member %s (%s)", member.id, member.name)
        return member

    def update_member(self, member_id: str, payload: Mapping[str, Any]) -> DeliveryMember:
        payload = require_mapping(payload, "member")
        current = self.get_member(member_id)

        changes: dict[str, Any] = {}
        if "name" in payload:
            changes["name"] = require_non_empty(payload["name"], "name")
        if "mobile" in payload:
            changes["mobile"] = require_non_empty(payload["mobile"], "mobile")
        if "route" in payload:
            changes["route"] = optional_str(payload["route"], "route") or ""
        if "shift" in payload:
            changes["shift"] = require_enum(payload["shift"], MemberShift, "shift")
        if "isActive" in payload:
            changes["is_active"] = require_bool(payload["isActive"], "isActive")

        updated = replace(current, **changes)
        if not self._members.update(updated):
            raise NotFoundError("Member not found")
        logger.info("Updated member %s fields=%s", member_id, sorted(changes))
        return updated
