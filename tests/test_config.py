"""
Test suite for configuration module
"""

import pytest
from pydantic import ValidationError

from atm_banking import config as config_module
from atm_banking.config import AtmConfig, get_config, reload_config
from atm_banking.currency import MAX_AMOUNT


class TestAtmConfig:
    """Test configuration defaults and environment overrides"""

    def test_defaults(self, monkeypatch):
        for name in ("ATM_HISTORY_CAPACITY", "ATM_DEFAULT_STATEMENT_COUNT",
                     "ATM_LOCK_TIMEOUT_SECONDS", "ATM_LOG_LEVEL", "ATM_LOG_FORMAT",
                     "ATM_SEED_DEMO_ACCOUNTS", "ATM_MAX_BALANCE"):
            monkeypatch.delenv(name, raising=False)

        config = AtmConfig()
        assert config.history_capacity == 20
        assert config.default_statement_count == 5
        assert config.lock_timeout_seconds == 5.0
        assert config.log_level == "INFO"
        assert config.log_format == "text"
        assert config.seed_demo_accounts is True
        assert config.max_balance == MAX_AMOUNT

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ATM_HISTORY_CAPACITY", "10")
        monkeypatch.setenv("ATM_LOCK_TIMEOUT_SECONDS", "0.25")
        monkeypatch.setenv("atm_log_format", "json")
        monkeypatch.setenv("ATM_SEED_DEMO_ACCOUNTS", "false")

        config = AtmConfig()
        assert config.history_capacity == 10
        assert config.lock_timeout_seconds == 0.25
        assert config.log_format == "json"
        assert config.seed_demo_accounts is False

    def test_blocking_lock_wait(self):
        assert AtmConfig(lock_timeout_seconds=None).lock_timeout_seconds is None

    @pytest.mark.parametrize("field, value", [
        ("history_capacity", 0),
        ("default_statement_count", -1),
        ("lock_timeout_seconds", 0),
        ("log_format", "xml"),
        ("max_balance", 0),
        ("max_balance", "1000000000000.00"),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            AtmConfig(**{field: value})

    def test_reload_config(self, monkeypatch):
        monkeypatch.setenv("ATM_DEFAULT_STATEMENT_COUNT", "9")
        original = config_module.config
        try:
            reloaded = reload_config()
            assert reloaded.default_statement_count == 9
            assert get_config() is reloaded
        finally:
            config_module.config = original
