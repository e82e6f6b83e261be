"""邮件搜索条件值对象"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException

# IMAP 日期格式使用固定英文月份缩写，不受 locale 影响
_IMAP_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class SearchCriteria(BaseValueObject):
    """
    邮件搜索条件

    Attributes:
        sender_address: 发件人地址
        since: 时间窗口起点（UTC）
        unseen_only: 是否只搜索未读邮件
    """

    sender_address: str
    since: datetime
    unseen_only: bool = True

    def validate(self) -> None:
        """验证搜索条件"""
        if not self.sender_address or not self.sender_address.strip():
            raise InvalidValueObjectException(
                value_object_type="SearchCriteria",
                value=self.sender_address,
                reason="Sender address cannot be empty",
            )

    @classmethod
    def anchored_at(
        cls,
        now: datetime,
        sender_address: str,
        window: timedelta = timedelta(hours=24),
        unseen_only: bool = True,
    ) -> "SearchCriteria":
        """以 now 为终点、向前 window 构造搜索条件"""
        return cls(
            sender_address=sender_address,
            since=now - window,
            unseen_only=unseen_only,
        )

    @property
    def imap_since_date(self) -> str:
        """IMAP SINCE 使用的日期字符串，如 17-Oct-2026"""
        return f"{self.since.day:02d}-{_IMAP_MONTHS[self.since.month - 1]}-{self.since.year}"

    def to_imap_args(self) -> List[str]:
        """
        转换为 UID SEARCH 参数

        IMAP SINCE 只精确到日期，窗口起点当天的邮件都会被包含。
        """
        args: List[str] = []
        if self.unseen_only:
            args.append("UNSEEN")
        args.extend(["FROM", f'"{self.sender_address}"'])
        args.extend(["SINCE", self.imap_since_date])
        return args
