"""Settings 配置测试"""

import pytest

from domain.mailbox.value_objects.source_name import SourceName
from infrastructure.config.settings import Settings


ENV_NAMES = [
    "PRIMARY_EMAIL", "PRIMARY_PASSWORD", "PRIMARY_HOST", "PRIMARY_PORT", "PRIMARY_USE_TLS",
    "GMAIL_EMAIL", "GMAIL_PASSWORD", "GMAIL_HOST", "GMAIL_PORT",
    "SECONDARY_EMAIL", "SECONDARY_PASSWORD", "SECONDARY_HOST", "SECONDARY_PORT",
    "SECONDARY_USE_TLS",
    "MAILCOW_EMAIL", "MAILCOW_PASSWORD", "MAILCOW_HOST", "MAILCOW_PORT",
    "VERIFICATION_SENDER", "VERIFICATION_TIMEOUT", "POLL_INTERVAL", "ROUND_TIMEOUT",
    "SEARCH_WINDOW_HOURS", "IMAP_TIMEOUT", "LOG_LEVEL", "LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """清理可能影响测试的环境变量"""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def load_settings() -> Settings:
    """只从环境变量读取配置"""
    return Settings(_env_file=None)


class TestSettingsDefaults:
    """默认值测试"""

    def test_defaults(self):
        """测试没有任何环境变量时的默认值"""
        settings = load_settings()

        assert settings.primary_host == "imap.gmail.com"
        assert settings.primary_port == 993
        assert settings.secondary_host == "mail.yourdomain.com"
        assert settings.verification_sender == "account@accountprotection.microsoft.com"
        assert settings.verification_timeout == 60.0
        assert settings.poll_interval == 5.0
        assert settings.round_timeout == 10.0
        assert settings.search_window_hours == 24.0
        assert settings.imap_timeout == 30.0
        assert settings.log_level == "INFO"

    def test_no_credentials_means_no_sources(self):
        """测试没有凭据时没有任何来源"""
        settings = load_settings()

        assert settings.primary_credentials is None
        assert settings.secondary_credentials is None
        assert settings.sources_config().is_empty


class TestSettingsSources:
    """邮箱来源测试"""

    def test_gmail_aliases(self, monkeypatch):
        """测试 GMAIL_* 变量配置主邮箱"""
        monkeypatch.setenv("GMAIL_EMAIL", "user@gmail.com")
        monkeypatch.setenv("GMAIL_PASSWORD", "app-password")

        credentials = load_settings().primary_credentials

        assert credentials is not None
        assert credentials.username == "user@gmail.com"
        assert credentials.host == "imap.gmail.com"
        assert credentials.port == 993
        assert credentials.secret.get_secret_value() == "app-password"

    def test_mailcow_aliases(self, monkeypatch):
        """测试 MAILCOW_* 变量配置备用邮箱"""
        monkeypatch.setenv("MAILCOW_EMAIL", "user@example.com")
        monkeypatch.setenv("MAILCOW_PASSWORD", "secret")
        monkeypatch.setenv("MAILCOW_HOST", "mail.example.com")
        monkeypatch.setenv("MAILCOW_PORT", "10993")

        settings = load_settings()
        credentials = settings.secondary_credentials

        assert credentials.host == "mail.example.com"
        assert credentials.port == 10993
        assert settings.sources_config().configured() == [(SourceName.SECONDARY, credentials)]

    def test_generic_names(self, monkeypatch):
        """测试 PRIMARY_* 变量与 STARTTLS"""
        monkeypatch.setenv("PRIMARY_EMAIL", "user@example.org")
        monkeypatch.setenv("PRIMARY_PASSWORD", "secret")
        monkeypatch.setenv("PRIMARY_HOST", "imap.example.org")
        monkeypatch.setenv("PRIMARY_PORT", "143")
        monkeypatch.setenv("PRIMARY_USE_TLS", "false")

        credentials = load_settings().primary_credentials

        assert credentials.host == "imap.example.org"
        assert credentials.port == 143
        assert credentials.use_tls is False

    def test_both_sources_in_priority_order(self, monkeypatch):
        """测试两个来源都配置"""
        monkeypatch.setenv("GMAIL_EMAIL", "user@gmail.com")
        monkeypatch.setenv("GMAIL_PASSWORD", "app-password")
        monkeypatch.setenv("MAILCOW_EMAIL", "user@example.com")
        monkeypatch.setenv("MAILCOW_PASSWORD", "secret")

        names = [name for name, _ in load_settings().sources_config().configured()]

        assert names == [SourceName.PRIMARY, SourceName.SECONDARY]

    def test_missing_password_skips_source(self, monkeypatch):
        """测试缺少密码时不配置该来源"""
        monkeypatch.setenv("GMAIL_EMAIL", "user@gmail.com")

        assert load_settings().primary_credentials is None

    def test_empty_password_skips_source(self, monkeypatch):
        """测试空密码时不配置该来源"""
        monkeypatch.setenv("GMAIL_EMAIL", "user@gmail.com")
        monkeypatch.setenv("GMAIL_PASSWORD", "")

        assert load_settings().primary_credentials is None

    def test_password_not_exposed(self, monkeypatch):
        """测试密码不会出现在 repr 中"""
        monkeypatch.setenv("GMAIL_EMAIL", "user@gmail.com")
        monkeypatch.setenv("GMAIL_PASSWORD", "hunter22")

        assert "hunter22" not in repr(load_settings())


class TestSettingsTimings:
    """时间参数测试"""

    def test_timings_from_env(self, monkeypatch):
        """测试从环境变量读取时间参数"""
        monkeypatch.setenv("VERIFICATION_TIMEOUT", "90")
        monkeypatch.setenv("POLL_INTERVAL", "2.5")
        monkeypatch.setenv("ROUND_TIMEOUT", "8")
        monkeypatch.setenv("SEARCH_WINDOW_HOURS", "1")

        settings = load_settings()

        assert settings.verification_timeout == 90.0
        assert settings.poll_interval == 2.5
        assert settings.round_timeout == 8.0
        assert settings.search_window_hours == 1.0
