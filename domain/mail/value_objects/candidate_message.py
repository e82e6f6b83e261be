"""候选邮件值对象"""

from dataclasses import dataclass

from domain.common.base_value_object import BaseValueObject


@dataclass(frozen=True)
class CandidateMessage(BaseValueObject):
    """
    候选邮件

    搜索命中后按 UID 拉取的原始邮件，解析为纯文本后即丢弃。

    Attributes:
        uid: IMAP UID
        raw_source: 原始 RFC 822 字节
    """

    uid: int
    raw_source: bytes

    def __repr__(self) -> str:
        return f"CandidateMessage(uid={self.uid}, size={len(self.raw_source)})"
