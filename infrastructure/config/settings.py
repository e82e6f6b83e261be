"""
应用配置管理

使用 pydantic-settings 管理环境变量和配置
"""

from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials
from domain.mailbox.value_objects.sources_config import WatcherSourcesConfig


class Settings(BaseSettings):
    """
    应用配置类

    自动从环境变量和 .env 文件读取配置。
    主邮箱兼容 GMAIL_* 变量，备用邮箱兼容 MAILCOW_* 变量。
    """

    # ========== 主邮箱（默认 Gmail） ==========
    primary_email: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("primary_email", "gmail_email")
    )
    primary_password: Optional[SecretStr] = Field(
        default=None, validation_alias=AliasChoices("primary_password", "gmail_password")
    )
    primary_host: str = Field(
        default="imap.gmail.com", validation_alias=AliasChoices("primary_host", "gmail_host")
    )
    primary_port: int = Field(
        default=993, validation_alias=AliasChoices("primary_port", "gmail_port")
    )
    primary_use_tls: bool = True

    # ========== 备用邮箱（自建邮件服务器） ==========
    secondary_email: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("secondary_email", "mailcow_email")
    )
    secondary_password: Optional[SecretStr] = Field(
        default=None, validation_alias=AliasChoices("secondary_password", "mailcow_password")
    )
    secondary_host: str = Field(
        default="mail.yourdomain.com",
        validation_alias=AliasChoices("secondary_host", "mailcow_host"),
    )
    secondary_port: int = Field(
        default=993, validation_alias=AliasChoices("secondary_port", "mailcow_port")
    )
    secondary_use_tls: bool = True

    # ========== 验证码检索 ==========
    verification_sender: str = "account@accountprotection.microsoft.com"
    verification_timeout: float = 60.0  # 秒
    poll_interval: float = 5.0  # 秒
    round_timeout: float = 10.0  # 秒
    search_window_hours: float = 24.0
    imap_timeout: float = 30.0  # 秒

    # ========== 日志配置 ==========
    log_level: str = "INFO"
    log_file: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 忽略未定义的环境变量
    )

    @property
    def primary_credentials(self) -> Optional[MailboxCredentials]:
        """主邮箱凭据，用户名或密码缺失时返回 None"""
        return self._credentials(
            self.primary_email,
            self.primary_password,
            self.primary_host,
            self.primary_port,
            self.primary_use_tls,
        )

    @property
    def secondary_credentials(self) -> Optional[MailboxCredentials]:
        """备用邮箱凭据，用户名或密码缺失时返回 None"""
        return self._credentials(
            self.secondary_email,
            self.secondary_password,
            self.secondary_host,
            self.secondary_port,
            self.secondary_use_tls,
        )

    def sources_config(self) -> WatcherSourcesConfig:
        """构造多来源监听配置"""
        return WatcherSourcesConfig(
            primary=self.primary_credentials,
            secondary=self.secondary_credentials,
        )

    @staticmethod
    def _credentials(
        username: Optional[str],
        password: Optional[SecretStr],
        host: str,
        port: int,
        use_tls: bool,
    ) -> Optional[MailboxCredentials]:
        if not username or password is None or not password.get_secret_value():
            return None
        return MailboxCredentials(
            host=host,
            username=username,
            secret=password,
            port=port,
            use_tls=use_tls,
        )


# 全局配置实例（单例）
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    获取配置实例（单例模式）

    Returns:
        Settings 实例
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
