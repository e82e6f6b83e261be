"""验证码检索异常"""

from typing import Dict, Optional


class VerificationRetrievalError(Exception):
    """验证码检索异常基类"""


class MailboxConnectionError(VerificationRetrievalError, ConnectionError):
    """建立邮箱会话失败（网络、TLS 或认证）"""

    def __init__(self, host: str, port: int, message: str):
        self.host = host
        self.port = port
        super().__init__(f"Failed to connect to {host}:{port} - {message}")


class MailboxAuthenticationError(MailboxConnectionError):
    """邮箱认证失败"""

    def __init__(self, host: str, port: int, username: str, message: str):
        self.username = username
        super().__init__(host, port, f"authentication failed for {username}: {message}")


class MailboxSessionError(VerificationRetrievalError):
    """轮询过程中会话出错"""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"Mailbox session failed during {stage} - {message}")


class MailboxNotConnectedError(VerificationRetrievalError):
    """在未连接的状态下调用了需要连接的操作"""

    def __init__(self, label: str, state: str):
        self.label = label
        self.state = state
        super().__init__(f"Mailbox {label} is not connected (state={state})")


class CodeWaitTimeoutError(VerificationRetrievalError, TimeoutError):
    """在时限内未找到验证码"""

    def __init__(self, timeout: float, source: Optional[str] = None):
        self.timeout = timeout
        self.source = source
        where = f" from {source}" if source else ""
        super().__init__(f"Timeout waiting for verification code{where} after {timeout:g}s")


class NoSourceAvailableError(VerificationRetrievalError):
    """没有任何可用的邮箱来源"""

    def __init__(self, failures: Optional[Dict[str, str]] = None):
        self.failures = dict(failures or {})
        if not self.failures:
            message = "No mailbox source is configured"
        else:
            details = "; ".join(f"{name}: {reason}" for name, reason in self.failures.items())
            message = f"Could not connect to any mailbox source ({details})"
        super().__init__(message)
