"""
pytest configuration and fixtures for Quote Client tests
"""

import pytest
import json
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock
import sys

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from utils.config_manager import QuoteConfig, HttpTransportConfig
from tests.mocks import MockTransport


@pytest.fixture(scope="session")
def test_config():
    """Test configuration fixture"""
    return {
        "logging_config": {
            "level": "WARNING",  # Reduce noise in tests
            "file_config": {"enabled": False},
            "console_config": {"enabled": False}
        },
        "quote_config": {
            "message_timeout": 1000,
            "expiry_duration": 10,
            "slow_exchange_threshold": 5.0
        },
        "transport_config": {
            "endpoint": "http://connector.test/ilp",
            "prefix": "test.alice.",
            "headers": {"Authorization": "Bearer token"}
        }
    }


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def config_dir(temp_dir, test_config):
    """Config directory split across two files"""
    with open(temp_dir / "logging.json", 'w') as f:
        json.dump({"logging_config": test_config["logging_config"]}, f)
    with open(temp_dir / "quote.json", 'w') as f:
        json.dump({
            "quote_config": test_config["quote_config"],
            "transport_config": test_config["transport_config"]
        }, f)
    return temp_dir


@pytest.fixture
def quote_config():
    """Quote configuration with a short timeout"""
    return QuoteConfig(message_timeout=1000, expiry_duration=10)


@pytest.fixture
def transport_config(test_config):
    """HTTP transport configuration"""
    data = test_config["transport_config"]
    return HttpTransportConfig(
        endpoint=data["endpoint"],
        prefix=data["prefix"],
        headers=dict(data["headers"])
    )


@pytest.fixture
def mock_transport():
    """Mock transport on ledger test.alice."""
    return MockTransport(prefix="test.alice.")


@pytest.fixture
def mock_logger():
    """Mock logger for testing"""
    mock = Mock()
    mock.debug = Mock()
    mock.info = Mock()
    mock.warning = Mock()
    mock.error = Mock()
    return mock


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
