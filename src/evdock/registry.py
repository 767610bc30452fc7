"""User and vehicle registries — bounded keyed record stores.

The scheduler only reads from these (membership level, SOC, ownership);
registration rules live here so every front-end gets the same checks.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from evdock.models.entities import MAX_NAME_LENGTH, User, Vehicle
from evdock.models.enums import MembershipLevel, RejectionReason
from evdock.models.results import Rejected


class UserRegistry:
    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._users: dict[int, User] = {}

    def __len__(self) -> int:
        return len(self._users)

    def lookup(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def register(self, user_id: int, name: str, membership: Union[int, MembershipLevel]) -> Union[User, Rejected]:
        if len(self._users) >= self._capacity:
            return Rejected(
                reason=RejectionReason.CAPACITY_EXCEEDED,
                message=f"Maximum user limit reached ({self._capacity})",
            )
        if user_id in self._users:
            return Rejected(
                reason=RejectionReason.DUPLICATE_IDENTITY,
                message=f"User ID {user_id} already exists",
            )
        user = User(
            user_id=user_id,
            name=name[:MAX_NAME_LENGTH],
            membership=MembershipLevel.parse(membership),
        )
        self._users[user_id] = user
        return user


class VehicleRegistry:
    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._vehicles: dict[int, Vehicle] = {}

    def __len__(self) -> int:
        return len(self._vehicles)

    def lookup(self, vehicle_id: int) -> Optional[Vehicle]:
        return self._vehicles.get(vehicle_id)

    def lookup_owned(self, vehicle_id: int, user_id: int) -> Optional[Vehicle]:
        """Vehicle only if it belongs to ``user_id``."""
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None or vehicle.user_id != user_id:
            return None
        return vehicle

    def register(
        self,
        vehicle_id: int,
        owner: Optional[User],
        soc: float,
        capacity_kwh: float,
        supports_v2g: bool,
    ) -> Union[Vehicle, Rejected]:
        if len(self._vehicles) >= self._capacity:
            return Rejected(
                reason=RejectionReason.CAPACITY_EXCEEDED,
                message=f"Maximum vehicle limit reached ({self._capacity})",
            )
        if owner is None:
            return Rejected(reason=RejectionReason.NOT_FOUND, message="Owning user not found")
        if vehicle_id in self._vehicles:
            return Rejected(
                reason=RejectionReason.DUPLICATE_IDENTITY,
                message=f"Vehicle ID {vehicle_id} already exists",
            )
        if not math.isfinite(capacity_kwh) or capacity_kwh <= 0:
            return Rejected(
                reason=RejectionReason.INVALID_REQUEST,
                message=f"Battery capacity must be positive, got {capacity_kwh}",
            )
        if not math.isfinite(soc):
            return Rejected(
                reason=RejectionReason.INVALID_REQUEST,
                message=f"State of charge must be a number, got {soc}",
            )
        vehicle = Vehicle(
            vehicle_id=vehicle_id,
            user_id=owner.user_id,
            battery_soc=soc,
            battery_capacity_kwh=capacity_kwh,
            supports_v2g=supports_v2g,
        )
        self._vehicles[vehicle_id] = vehicle
        return vehicle
