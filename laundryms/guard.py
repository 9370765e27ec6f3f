from __future__ import annotations

from typing import Any, Optional

from laundryms.log import get_logger

logger = get_logger(__name__)

LANDING = "/"
SIGNUP = "/signup"
LOGIN = "/login"
CUSTOMER_DASHBOARD = "/customer-dashboard"
CUSTOMER_ORDERS = "/customer"
ADMIN_DASHBOARD = "/admin-dashboard"

PUBLIC_ROUTES = {LANDING, SIGNUP, LOGIN}
ADMIN_ROUTES = {CUSTOMER_ORDERS, ADMIN_DASHBOARD}
ROUTES = PUBLIC_ROUTES | ADMIN_ROUTES | {CUSTOMER_DASHBOARD}

ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"


def landing_route_for(role: Optional[str]) -> str:
    return ADMIN_DASHBOARD if role == ROLE_ADMIN else CUSTOMER_DASHBOARD


def resolve_route(requested: str, user: Any, role: Optional[str]) -> str:
    """Route to render for ``requested`` given the signed-in ``user`` and ``role``.

    Access problems redirect instead of erroring: anonymous visitors go to the
    login page and non-admins on admin pages go to their own dashboard.
    """
    if requested not in ROUTES:
        logger.info("Unknown route %r, sending to landing page", requested)
        return LANDING

    if requested in PUBLIC_ROUTES:
        return requested

    if user is None:
        logger.info("Anonymous visit to %s, redirecting to login", requested)
        return LOGIN

    role = role or ROLE_CUSTOMER
    if requested in ADMIN_ROUTES and role != ROLE_ADMIN:
        logger.info("Role %r may not open %s, redirecting", role, requested)
        return CUSTOMER_DASHBOARD

    return requested
