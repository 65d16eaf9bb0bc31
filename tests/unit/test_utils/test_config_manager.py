"""
Unit tests for configuration manager
"""

import pytest
import json

from utils.config_manager import UnifiedConfigManager, QuoteConfig, HttpTransportConfig
from utils.exceptions import ConfigurationError, ErrorCodes


@pytest.mark.unit
class TestConfigManager:
    """Test cases for UnifiedConfigManager"""

    @pytest.fixture
    def config_manager(self, config_dir):
        """Create UnifiedConfigManager instance"""
        return UnifiedConfigManager(config_dir)

    def test_files_are_merged(self, config_manager):
        """Test sections from every file are available"""
        assert "logging_config" in config_manager
        assert "quote_config" in config_manager
        assert config_manager["transport_config"]["prefix"] == "test.alice."

    def test_get_nested(self, config_manager):
        """Test dotted path access"""
        assert config_manager.get_nested("quote_config.message_timeout") == 1000
        assert config_manager.get_nested("quote_config.missing", "default") == "default"
        assert config_manager.get_nested("transport_config.prefix.deeper") is None

    def test_get_quote_config(self, config_manager):
        """Test typed quote configuration"""
        assert config_manager.get_quote_config() == QuoteConfig(
            message_timeout=1000,
            expiry_duration=10,
            slow_exchange_threshold=5.0
        )

    def test_get_transport_config(self, config_manager):
        """Test typed transport configuration"""
        assert config_manager.get_transport_config() == HttpTransportConfig(
            endpoint="http://connector.test/ilp",
            prefix="test.alice.",
            headers={"Authorization": "Bearer token"}
        )

    def test_get_logging_config(self, config_manager):
        """Test typed logging configuration"""
        logging_config = config_manager.get_logging_config()

        assert logging_config.level == "WARNING"
        assert logging_config.file_config.enabled is False
        assert logging_config.console_config.enabled is False

    def test_defaults_for_missing_sections(self, temp_dir):
        """Test missing sections fall back to dataclass defaults"""
        with open(temp_dir / "empty.json", 'w') as f:
            json.dump({}, f)

        manager = UnifiedConfigManager(temp_dir)

        assert manager.get_quote_config() == QuoteConfig()
        assert manager.get_transport_config() == HttpTransportConfig()

    def test_set_invalidates_typed_cache(self, config_manager):
        """Test typed configs reflect later updates"""
        assert config_manager.get_quote_config().message_timeout == 1000

        config_manager.set("quote_config", {"message_timeout": 250})

        assert config_manager.get_quote_config().message_timeout == 250

    def test_update_from_dict(self, config_manager):
        """Test bulk updates"""
        config_manager.update_from_dict({"transport_config": {"prefix": "g.usd."}})

        assert config_manager.get_transport_config().prefix == "g.usd."

    def test_invalid_values_fall_back(self, config_manager):
        """Test unparsable values yield defaults"""
        config_manager.set("quote_config", {"message_timeout": "soon"})

        assert config_manager.get_quote_config() == QuoteConfig()

    def test_missing_directory(self, temp_dir):
        """Test a missing config directory is an error"""
        with pytest.raises(ConfigurationError) as exc_info:
            UnifiedConfigManager(temp_dir / "nope")

        assert exc_info.value.error_code == ErrorCodes.CONFIG_NOT_FOUND

    def test_empty_directory(self, temp_dir):
        """Test a directory without JSON files is an error"""
        with pytest.raises(ConfigurationError) as exc_info:
            UnifiedConfigManager(temp_dir)

        assert exc_info.value.error_code == ErrorCodes.CONFIG_NOT_FOUND

    def test_malformed_json(self, temp_dir):
        """Test malformed JSON is reported"""
        (temp_dir / "broken.json").write_text("{not json", encoding='utf-8')

        with pytest.raises(ConfigurationError) as exc_info:
            UnifiedConfigManager(temp_dir)

        assert exc_info.value.error_code == ErrorCodes.CONFIG_INVALID_FORMAT

    def test_non_object_json(self, temp_dir):
        """Test top-level JSON must be an object"""
        (temp_dir / "list.json").write_text("[1, 2]", encoding='utf-8')

        with pytest.raises(ConfigurationError):
            UnifiedConfigManager(temp_dir)

    def test_save_and_reload(self, config_manager, config_dir):
        """Test saving writes a merged file that reload skips"""
        config_manager.set("quote_config", {"message_timeout": 42})
        config_manager.save_config()

        saved = json.loads((config_dir / "config.merged.json").read_text(encoding='utf-8'))
        assert saved["quote_config"] == {"message_timeout": 42}

        config_manager.reload_config()
        assert config_manager.get_quote_config().message_timeout == 1000

    def test_to_dict_is_a_copy(self, config_manager):
        """Test the exported dict does not alias internal state"""
        exported = config_manager.to_dict()
        exported["extra"] = True

        assert "extra" not in config_manager
