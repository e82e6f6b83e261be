"""Verification 领域模块

验证码检索的领域层，包含验证码值对象、监听器状态、
单轮检查结果、提取服务以及异常定义。
"""

from domain.verification.value_objects.verification_code import VerificationCode
from domain.verification.value_objects.watcher_state import WatcherState
from domain.verification.value_objects.source_outcome import OutcomeKind, SourceOutcome
from domain.verification.services.code_extractor import VerificationCodeExtractor
from domain.verification.exceptions import (
    VerificationRetrievalError,
    MailboxConnectionError,
    MailboxAuthenticationError,
    MailboxSessionError,
    MailboxNotConnectedError,
    CodeWaitTimeoutError,
    NoSourceAvailableError,
)

__all__ = [
    "VerificationCode",
    "WatcherState",
    "OutcomeKind",
    "SourceOutcome",
    "VerificationCodeExtractor",
    "VerificationRetrievalError",
    "MailboxConnectionError",
    "MailboxAuthenticationError",
    "MailboxSessionError",
    "MailboxNotConnectedError",
    "CodeWaitTimeoutError",
    "NoSourceAvailableError",
]
