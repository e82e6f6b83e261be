"""验证码值对象模块"""

from domain.verification.value_objects.verification_code import VerificationCode
from domain.verification.value_objects.watcher_state import WatcherState
from domain.verification.value_objects.source_outcome import OutcomeKind, SourceOutcome

__all__ = [
    "VerificationCode",
    "WatcherState",
    "OutcomeKind",
    "SourceOutcome",
]
