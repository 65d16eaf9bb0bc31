"""
Basic import tests to verify module structure
"""

import pytest
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))


def test_basic_imports():
    """Test basic module imports"""
    # Test utils modules
    from utils.config_manager import UnifiedConfigManager
    from utils.logging_manager import LoggingManager

    # Test codec modules
    from codec import serialize_packet, deserialize_packet
    from codec.oer import Reader, Writer

    # Test transport modules
    from transport import BaseTransport, HttpTransport, safe_connect

    # Test ILQP modules
    from ilqp import quote, quote_by_packet, quote_by_connector, compare_quotes

    # Test main module
    from main import QuoteClient

    assert True  # All imports succeeded


def test_config_loading():
    """Test configuration loading"""
    from utils.config_manager import config_manager

    # Test that config is loaded
    assert config_manager is not None

    # Test getting typed configs from the shipped config directory
    quote_config = config_manager.get_quote_config()
    assert quote_config.message_timeout > 0
    assert config_manager.get_transport_config().prefix.endswith(".")


def test_logging_setup():
    """Test logging setup"""
    from utils.logging_manager import logging_manager, ilqp_logger

    # Test that logging is configured
    assert logging_manager is not None
    assert ilqp_logger is not None


def test_ilqp_module_docstrings():
    """Test ilqp modules share an English module docstring"""
    import ilqp
    from ilqp import amounts, connector, models, quoter, request_codec

    for module in (ilqp, amounts, connector, models, quoter, request_codec):
        assert module.__doc__ and module.__doc__.strip()
        assert module.__doc__.isascii(), module.__name__


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
