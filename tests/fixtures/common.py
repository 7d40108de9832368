"""
Common/Shared Fixtures

Base factories and generators used across test layers.
"""
import uuid
from datetime import datetime, timezone


def make_order_id() -> str:
    """Generate a unique order ID"""
    return f"ord_test_{uuid.uuid4().hex[:12]}"


def make_user_id() -> str:
    """Generate a unique user ID"""
    return f"usr_test_{uuid.uuid4().hex[:12]}"


def make_timestamp() -> datetime:
    """Generate current UTC timestamp"""
    return datetime.now(timezone.utc)
