"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/  : Component tests (mocked collaborators)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from core.config import OrderServiceConfig
from tests.fixtures import HISTORY_TABLE, NOTIFICATION_TOPIC, ORDERS_TABLE


# =============================================================================
# Test Configuration
# =============================================================================

@pytest.fixture
def order_config() -> OrderServiceConfig:
    """Order service config with test resource identifiers"""
    return OrderServiceConfig(
        orders_table=ORDERS_TABLE,
        history_table=HISTORY_TABLE,
        notification_topic=NOTIFICATION_TOPIC,
    )
