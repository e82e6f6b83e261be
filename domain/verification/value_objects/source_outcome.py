"""单来源单轮检查结果"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.mailbox.value_objects.source_name import SourceName
from domain.verification.value_objects.verification_code import VerificationCode


class OutcomeKind(str, Enum):
    """检查结果类型"""

    CODE = "code"
    NO_MATCH = "no_match"
    ERROR = "error"


@dataclass(frozen=True)
class SourceOutcome:
    """
    单个来源在一轮检查中的结果

    Attributes:
        source: 来源名称
        kind: 结果类型
        code: 找到的验证码（仅 CODE）
        cause: 失败原因（仅 ERROR）
    """

    source: SourceName
    kind: OutcomeKind
    code: Optional[VerificationCode] = None
    cause: Optional[BaseException] = None

    @classmethod
    def found(cls, source: SourceName, code: VerificationCode) -> "SourceOutcome":
        return cls(source=source, kind=OutcomeKind.CODE, code=code)

    @classmethod
    def no_match(cls, source: SourceName) -> "SourceOutcome":
        return cls(source=source, kind=OutcomeKind.NO_MATCH)

    @classmethod
    def error(cls, source: SourceName, cause: BaseException) -> "SourceOutcome":
        return cls(source=source, kind=OutcomeKind.ERROR, cause=cause)

    @property
    def has_code(self) -> bool:
        return self.kind is OutcomeKind.CODE
