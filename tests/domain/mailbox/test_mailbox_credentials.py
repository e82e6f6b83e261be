"""MailboxCredentials 值对象测试"""

import pytest
from pydantic import SecretStr

from domain.common.exceptions import InvalidValueObjectException
from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials


class TestMailboxCredentials:
    """MailboxCredentials 值对象测试"""

    def test_create_valid_credentials(self):
        """测试创建有效凭据"""
        credentials = MailboxCredentials.create(
            host="imap.gmail.com",
            username="user@gmail.com",
            secret="app-password",
        )

        assert credentials.host == "imap.gmail.com"
        assert credentials.port == 993
        assert credentials.use_tls is True
        assert credentials.secret.get_secret_value() == "app-password"

    def test_create_with_starttls(self):
        """测试 STARTTLS 配置"""
        credentials = MailboxCredentials.create(
            host="mail.example.com",
            username="user@example.com",
            secret="secret",
            port=143,
            use_tls=False,
        )

        assert credentials.port == 143
        assert credentials.use_tls is False

    def test_empty_host_raises_error(self):
        """测试空主机地址抛出异常"""
        with pytest.raises(InvalidValueObjectException) as exc_info:
            MailboxCredentials.create(host="  ", username="user@example.com", secret="secret")

        assert "IMAP host cannot be empty" in exc_info.value.message

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_invalid_port_raises_error(self, port):
        """测试无效端口抛出异常"""
        with pytest.raises(InvalidValueObjectException) as exc_info:
            MailboxCredentials.create(
                host="imap.example.com", username="user@example.com", secret="secret", port=port
            )

        assert "Invalid port number" in exc_info.value.message

    def test_empty_username_raises_error(self):
        """测试空用户名抛出异常"""
        with pytest.raises(InvalidValueObjectException) as exc_info:
            MailboxCredentials.create(host="imap.example.com", username="", secret="secret")

        assert "Username cannot be empty" in exc_info.value.message

    def test_empty_secret_raises_error(self):
        """测试空密码抛出异常"""
        with pytest.raises(InvalidValueObjectException) as exc_info:
            MailboxCredentials(
                host="imap.example.com", username="user@example.com", secret=SecretStr("")
            )

        assert "Secret cannot be empty" in exc_info.value.message

    def test_repr_does_not_expose_secret(self):
        """测试 repr 不暴露密码"""
        credentials = MailboxCredentials.create(
            host="imap.example.com", username="user@example.com", secret="hunter22"
        )

        assert "hunter22" not in repr(credentials)

    def test_connection_string(self):
        """测试连接字符串"""
        tls = MailboxCredentials.create(
            host="imap.gmail.com", username="user@gmail.com", secret="secret"
        )
        plain = MailboxCredentials.create(
            host="mail.example.com",
            username="user@example.com",
            secret="secret",
            port=143,
            use_tls=False,
        )

        assert tls.connection_string == "imaps://user@gmail.com@imap.gmail.com:993"
        assert plain.connection_string == "imap://user@example.com@mail.example.com:143"

    def test_equality(self):
        """测试值相等"""
        a = MailboxCredentials.create(host="imap.example.com", username="u@example.com", secret="s")
        b = MailboxCredentials.create(host="imap.example.com", username="u@example.com", secret="s")

        assert a == b
