"""
storefront/utils/time_utils.py

Purpose: Time and expiry helpers

- Naive-UTC timestamps (matches what MongoDB hands back)
- Session expiry calculations
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Current UTC time without tzinfo, millisecond precision like BSON dates.
    """
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def calculate_session_expiry(created_at: datetime, ttl_hours: int = 24) -> datetime:
    """
    Calculates the fixed expiry of a session.
    """
    return created_at + timedelta(hours=ttl_hours)


def is_session_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """
    Checks whether a session expiry timestamp has passed.
    A missing expiry counts as expired.
    """
    if not expires_at:
        return True
    if expires_at.tzinfo is not None:
        expires_at = expires_at.astimezone(timezone.utc).replace(tzinfo=None)
    return (now or utcnow()) >= expires_at
