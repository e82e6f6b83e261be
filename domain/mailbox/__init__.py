"""
邮箱来源界限上下文

提供被监听邮箱的领域模型，包括：
- MailboxCredentials 值对象
- WatcherSourcesConfig 多来源配置
- SourceName 来源枚举
"""

from domain.mailbox.value_objects.source_name import SourceName
from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials
from domain.mailbox.value_objects.sources_config import WatcherSourcesConfig

__all__ = [
    "SourceName",
    "MailboxCredentials",
    "WatcherSourcesConfig",
]
