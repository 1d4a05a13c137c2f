"""Role-based access policy.

Authentication happens outside the service; by the time a request
reaches a handler the caller is reduced to a role. The policy answers
one question: may this role use this capability?
"""

from __future__ import annotations

from enum import Enum

from ims.domain.exceptions import PermissionDeniedError


class Role(Enum):
    ADMIN = "admin"
    SELLER = "seller"


class Capability(Enum):
    VIEW_CATALOG = "view_catalog"
    MANAGE_CATALOG = "manage_catalog"
    RECEIVE_STOCK = "receive_stock"
    PLACE_ORDERS = "place_orders"
    VIEW_ORDERS = "view_orders"


_GRANTS: dict[Capability, frozenset[Role]] = {
    Capability.VIEW_CATALOG: frozenset({Role.ADMIN, Role.SELLER}),
    Capability.MANAGE_CATALOG: frozenset({Role.ADMIN}),
    Capability.RECEIVE_STOCK: frozenset({Role.ADMIN}),
    Capability.PLACE_ORDERS: frozenset({Role.ADMIN, Role.SELLER}),
    Capability.VIEW_ORDERS: frozenset({Role.ADMIN, Role.SELLER}),
}


class AccessPolicy:

    @staticmethod
    def is_permitted(role: Role, capability: Capability) -> bool:
        return role in _GRANTS[capability]

    @classmethod
    def require(cls, role: Role, capability: Capability) -> None:
        if not cls.is_permitted(role, capability):
            raise PermissionDeniedError(
                f"Role '{role.value}' may not {capability.value.replace('_', ' ')}"
            )
