"""Role model: a total order customer < staff < admin."""

from enum import Enum


class Role(str, Enum):
    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"


ROLE_RANK: dict[Role, int] = {
    Role.CUSTOMER: 1,
    Role.STAFF: 2,
    Role.ADMIN: 3,
}


def rank(role: Role | str) -> int:
    """Rank of a role; unknown role strings rank 0 and are denied everything."""
    try:
        return ROLE_RANK[Role(role)]
    except ValueError:
        return 0


def has_rank(caller_role: Role | str, required: Role | str) -> bool:
    """True iff the caller's role ranks at or above the required role."""
    return rank(caller_role) >= rank(required) > 0
