# db/models.py
"""
Supabase does not require ORM model classes.
Tables created in your Supabase dashboard:

Table: profiles
- id (uuid, PK, = auth.users.id)
- name (text)
- email (text)
- role (text, 'customer' | 'admin', default 'customer')

Table: customers
- id (int, PK)
- profile_id (uuid, FK → profiles.id, unique)
- name (text)
- email (text)

Table: orders
- id (int, PK)
- customer_id (int, FK → customers.id)
- service_type (text)
- quantity (numeric)
- total (numeric)
- pickup_date (date)
- pickup_time (time)
- status (text, 'Pending' | 'Completed')
- created_at (timestamp, default now())

The dataclasses below are read-only views over rows returned by the client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

PROFILES = "profiles"
CUSTOMERS = "customers"
ORDERS = "orders"

STATUS_PENDING = "Pending"
STATUS_COMPLETED = "Completed"
STATUSES = [STATUS_PENDING, STATUS_COMPLETED]


@dataclass
class Profile:
    id: str
    name: Optional[str]
    email: Optional[str]
    role: str = "customer"

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=row["id"],
            name=row.get("name"),
            email=row.get("email"),
            role=row.get("role") or "customer",
        )


@dataclass
class Customer:
    id: Any
    profile_id: str
    name: Optional[str]
    email: Optional[str]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Customer":
        return cls(
            id=row["id"],
            profile_id=row["profile_id"],
            name=row.get("name"),
            email=row.get("email"),
        )
