from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, date, time
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
from supabase import Client

from db.models import CUSTOMERS, ORDERS, PROFILES, STATUS_COMPLETED, STATUS_PENDING, Customer, Profile
from laundryms.errors import LaundryError
from laundryms.guard import ROLE_CUSTOMER
from laundryms.log import get_logger
from laundryms.pricing import calculate_total

logger = get_logger(__name__)

# Orders with the name/email of the profile behind their customer
ORDERS_WITH_CUSTOMER = "*, customer:customers(id, profile:profiles(name, email))"


# ----------------- FORM ------------------------

@dataclass
class OrderForm:
    service_type: str = ""
    quantity: Union[int, float] = 0
    pickup_date: Optional[Union[date, str]] = None
    pickup_time: Optional[Union[time, str]] = None
    status: str = STATUS_PENDING

    @property
    def total(self):
        return calculate_total(self.service_type, self.quantity)

    @classmethod
    def from_order(cls, order: Dict[str, Any]) -> "OrderForm":
        return cls(
            service_type=order.get("service_type") or "",
            quantity=order.get("quantity") or 0,
            pickup_date=order.get("pickup_date"),
            pickup_time=order.get("pickup_time"),
            status=order.get("status") or STATUS_PENDING,
        )

    def validate(self) -> None:
        if not self.service_type or not self.pickup_date or not self.pickup_time or not self.quantity:
            raise LaundryError("All fields are required!")
        if self.quantity < 0:
            raise LaundryError("Quantity cannot be negative.")

    def to_row(self) -> Dict[str, Any]:
        return {
            "service_type": self.service_type,
            "quantity": self.quantity,
            "pickup_date": _date_str(self.pickup_date),
            "pickup_time": _time_str(self.pickup_time),
            "status": self.status,
            "total": self.total,
        }


def parse_date_str(val) -> Optional[date]:
    if isinstance(val, date):
        return val
    try:
        return datetime.strptime(str(val).strip(), "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None


def parse_time_str(val) -> Optional[time]:
    if isinstance(val, time):
        return val
    if not val:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(str(val).strip(), fmt).time()
        except ValueError:
            continue
    return None


def _date_str(value) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _time_str(value) -> str:
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value)


# ----------------- CUSTOMER ------------------------

def ensure_customer(client: Client, user: Any) -> Customer:
    """Fetch the customer row of ``user``, creating profile and customer rows
    on the first visit."""

    # 1. Profile
    profile_res = client.table(PROFILES).select("*").eq("id", user.id).execute()
    if profile_res.data:
        profile = Profile.from_row(profile_res.data[0])
    else:
        metadata = getattr(user, "user_metadata", None) or {}
        profile_insert = (
            client.table(PROFILES)
            .insert(
                {
                    "id": user.id,
                    "name": metadata.get("full_name") or "Unnamed",
                    "email": user.email,
                }
            )
            .execute()
        )
        if not profile_insert.data:
            raise LaundryError("Failed to create profile. No data returned.")
        profile = Profile.from_row(profile_insert.data[0])
        logger.info("Created profile for %s", user.id)

    # 2. Customer
    customer_res = client.table(CUSTOMERS).select("*").eq("profile_id", profile.id).execute()
    if customer_res.data:
        return Customer.from_row(customer_res.data[0])

    customer_insert = (
        client.table(CUSTOMERS)
        .insert(
            {
                "profile_id": profile.id,
                "name": profile.name,
                "email": profile.email,
            }
        )
        .execute()
    )
    if not customer_insert.data:
        raise LaundryError("Failed to create customer. No data returned.")
    logger.info("Created customer for profile %s", profile.id)
    return Customer.from_row(customer_insert.data[0])


# ----------------- CUSTOMER ORDERS ------------------------

def list_customer_orders(client: Client, customer_id: Any) -> List[Dict[str, Any]]:
    res = (
        client.table(ORDERS)
        .select("*")
        .eq("customer_id", customer_id)
        .order("created_at", desc=True)
        .execute()
    )
    return res.data or []


def save_order(client: Client, customer_id: Any, form: OrderForm, order_id: Any = None) -> Dict[str, Any]:
    """Insert a new order or update ``order_id``; the total always comes from the form."""
    form.validate()
    row = form.to_row()

    if order_id is not None:
        res = client.table(ORDERS).update(row).eq("id", order_id).execute()
        logger.info("Updated order %s", order_id)
    else:
        res = client.table(ORDERS).insert({"customer_id": customer_id, **row}).execute()
        logger.info("Created order for customer %s", customer_id)

    if not res.data:
        raise LaundryError("Failed to save order. No data returned.")
    return res.data[0]


def delete_order(client: Client, order_id: Any) -> None:
    client.table(ORDERS).delete().eq("id", order_id).execute()
    logger.info("Deleted order %s", order_id)


def order_stats(orders: List[Dict[str, Any]]) -> Dict[str, int]:
    return {
        "total_orders": len(orders),
        "completed": sum(1 for o in orders if o.get("status") == STATUS_COMPLETED),
        "pending": sum(1 for o in orders if o.get("status") == STATUS_PENDING),
    }


# ----------------- ADMIN ------------------------

def list_all_orders(client: Client) -> List[Dict[str, Any]]:
    res = (
        client.table(ORDERS)
        .select(ORDERS_WITH_CUSTOMER)
        .order("created_at", desc=True)
        .execute()
    )
    return res.data or []


def admin_update_order(client: Client, order: Dict[str, Any], quantity, status: str) -> Dict[str, Any]:
    if not quantity or quantity <= 0:
        raise LaundryError("Quantity must be greater than 0.")

    total = calculate_total(order.get("service_type"), quantity)
    res = (
        client.table(ORDERS)
        .update({"quantity": quantity, "total": total, "status": status})
        .eq("id", order["id"])
        .execute()
    )
    logger.info("Admin updated order %s", order["id"])
    if not res.data:
        raise LaundryError("Failed to update order.")
    return res.data[0]


def admin_stats(client: Client) -> Dict[str, Any]:
    orders = client.table(ORDERS).select("*").execute().data or []
    customers = client.table(PROFILES).select("*").eq("role", ROLE_CUSTOMER).execute().data or []

    stats = order_stats(orders)
    stats["total_customers"] = len(customers)
    stats["total_revenue"] = sum(float(o.get("total") or 0) for o in orders)
    return stats


# ----------------- TABLES ------------------------

ORDER_COLUMNS = [
    "id", "name", "email", "service_type", "quantity", "total",
    "pickup_date", "pickup_time", "status", "created_at",
]


def orders_frame(orders: List[Dict[str, Any]]) -> pd.DataFrame:
    """Flatten orders (optionally carrying the nested customer/profile) for display."""
    if not orders:
        return pd.DataFrame(columns=ORDER_COLUMNS)

    df = pd.json_normalize(orders)
    df = df.rename(columns={
        "customer.profile.name": "name",
        "customer.profile.email": "email",
    })
    for col in ORDER_COLUMNS:
        if col not in df.columns:
            df[col] = None

    df["quantity"] = pd.to_numeric(df["quantity"], errors="coerce").fillna(0)
    df["total"] = pd.to_numeric(df["total"], errors="coerce").fillna(0)
    return df[ORDER_COLUMNS]


def format_pickup(pickup_date, pickup_time) -> Tuple[str, str]:
    if not pickup_date or not pickup_time:
        return "-", "-"
    raw = f"{_date_str(pickup_date)}T{_time_str(pickup_time)}"
    for fmt in ("%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"):
        try:
            dt = datetime.strptime(raw, fmt)
            return dt.strftime("%b %d, %Y"), dt.strftime("%I:%M %p")
        except ValueError:
            continue
    return "-", "-"
