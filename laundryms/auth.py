from __future__ import annotations

from typing import Any, Optional, Tuple

from email_validator import validate_email as _validate_email, EmailNotValidError
from supabase import Client

from db.models import PROFILES
from laundryms.errors import LaundryError
from laundryms.guard import ROLE_CUSTOMER
from laundryms.log import get_logger

logger = get_logger(__name__)


# ----------------- VALIDATORS ------------------------

def validate_email(email: str) -> bool:
    try:
        _validate_email(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


# ----------------- SESSION ------------------------

def current_user(client: Client) -> Optional[Any]:
    """User of the stored auth session, or None when signed out."""
    session = client.auth.get_session()
    if session is None:
        return None
    return session.user


def fetch_role(client: Client, user_id: str) -> str:
    res = client.table(PROFILES).select("role").eq("id", user_id).execute()
    if not res.data:
        return ROLE_CUSTOMER
    return res.data[0].get("role") or ROLE_CUSTOMER


# ----------------- SIGN UP / IN / OUT ------------------------

def sign_up(client: Client, name: str, email: str, password: str, confirm_password: str) -> Any:
    name = (name or "").strip()
    email = (email or "").strip()

    if not name or not email or not password:
        raise LaundryError("All fields are required.")
    if password != confirm_password:
        raise LaundryError("Passwords do not match!")
    if not validate_email(email):
        raise LaundryError("Invalid email. Please try format: name@example.com")

    # No redirect URL: accounts are usable without confirming the email
    res = client.auth.sign_up(
        {
            "email": email,
            "password": password,
            "options": {"data": {"full_name": name}},
        }
    )
    user = res.user
    if user is None:
        raise LaundryError("Something went wrong. Please try again.")

    client.table(PROFILES).insert({"id": user.id, "name": name, "email": email}).execute()
    logger.info("Registered %s", email)
    return user


def sign_in(client: Client, email: str, password: str) -> Tuple[Any, str]:
    res = client.auth.sign_in_with_password({"email": (email or "").strip(), "password": password})
    user = res.user
    if user is None:
        raise LaundryError("Something went wrong. Please try again.")

    try:
        profile = client.table(PROFILES).select("role").eq("id", user.id).execute()
    except Exception as e:
        logger.exception("Profile lookup failed for %s", user.id)
        raise LaundryError("Failed to retrieve user profile.") from e
    if not profile.data:
        raise LaundryError("Failed to retrieve user profile.")

    role = profile.data[0].get("role") or ROLE_CUSTOMER
    logger.info("Signed in %s as %s", user.id, role)
    return user, role


def sign_out(client: Client) -> None:
    client.auth.sign_out()
