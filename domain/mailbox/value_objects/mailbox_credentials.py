"""邮箱凭据值对象"""

from dataclasses import dataclass

from pydantic import SecretStr

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException


@dataclass(frozen=True)
class MailboxCredentials(BaseValueObject):
    """
    IMAP 邮箱凭据值对象

    封装连接单个邮箱所需的全部信息。密码使用 SecretStr 保存，
    不会出现在 repr 或日志中。

    Attributes:
        host: IMAP 服务器地址
        port: IMAP 服务器端口，默认 993
        username: 登录用户名（通常是邮箱地址）
        secret: 登录密码或应用专用密码
        use_tls: True 使用隐式 TLS（IMAPS），False 使用 STARTTLS 升级
    """

    host: str
    username: str
    secret: SecretStr
    port: int = 993
    use_tls: bool = True

    def validate(self) -> None:
        """验证凭据的有效性"""
        if not self.host or not self.host.strip():
            raise InvalidValueObjectException(
                value_object_type="MailboxCredentials",
                value=self.host,
                reason="IMAP host cannot be empty",
            )

        if not 1 <= self.port <= 65535:
            raise InvalidValueObjectException(
                value_object_type="MailboxCredentials",
                value=self.port,
                reason=f"Invalid port number: {self.port}. Must be between 1 and 65535",
            )

        if not self.username or not self.username.strip():
            raise InvalidValueObjectException(
                value_object_type="MailboxCredentials",
                value=self.username,
                reason="Username cannot be empty",
            )

        if not self.secret.get_secret_value():
            raise InvalidValueObjectException(
                value_object_type="MailboxCredentials",
                value=None,
                reason="Secret cannot be empty",
            )

    @classmethod
    def create(
        cls,
        host: str,
        username: str,
        secret: str,
        port: int = 993,
        use_tls: bool = True,
    ) -> "MailboxCredentials":
        """从明文密码创建凭据"""
        return cls(
            host=host,
            username=username,
            secret=SecretStr(secret),
            port=port,
            use_tls=use_tls,
        )

    @property
    def connection_string(self) -> str:
        """返回连接字符串格式（不含密码）"""
        protocol = "imaps" if self.use_tls else "imap"
        return f"{protocol}://{self.username}@{self.host}:{self.port}"
