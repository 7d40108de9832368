"""
Component Test Layer Configuration

Structure:
    tests/component/
    └── order_service/   Repository, publisher, handler, refunds, API
        └── mocks.py     Store and notifier mocks

Usage:
    pytest tests/component -v
"""
import pytest

from tests.component.order_service.mocks import MockNotifierClient, MockStoreClient


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Collaborator Mocks
# =============================================================================

@pytest.fixture
def mock_store() -> MockStoreClient:
    """Mock store client"""
    return MockStoreClient()


@pytest.fixture
def mock_notifier() -> MockNotifierClient:
    """Mock notifier client"""
    return MockNotifierClient()
