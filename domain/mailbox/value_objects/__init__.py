"""邮箱值对象模块"""

from domain.mailbox.value_objects.source_name import SourceName
from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials
from domain.mailbox.value_objects.sources_config import WatcherSourcesConfig

__all__ = [
    "SourceName",
    "MailboxCredentials",
    "WatcherSourcesConfig",
]
