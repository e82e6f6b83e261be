"""多来源配置值对象"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from domain.common.base_value_object import BaseValueObject
from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials
from domain.mailbox.value_objects.source_name import SourceName


@dataclass(frozen=True)
class WatcherSourcesConfig(BaseValueObject):
    """
    多来源监听配置

    显式列出可识别的邮箱来源，未配置的来源为 None。

    Attributes:
        primary: 主邮箱凭据
        secondary: 备用邮箱凭据
    """

    primary: Optional[MailboxCredentials] = None
    secondary: Optional[MailboxCredentials] = None

    def configured(self) -> List[Tuple[SourceName, MailboxCredentials]]:
        """按优先顺序返回已配置的来源"""
        pairs = [
            (SourceName.PRIMARY, self.primary),
            (SourceName.SECONDARY, self.secondary),
        ]
        return [(name, creds) for name, creds in pairs if creds is not None]

    @property
    def is_empty(self) -> bool:
        """是否没有任何已配置来源"""
        return not self.configured()
