"""验证码检索应用层服务模块"""

from application.verification.services.mailbox_watcher import MailboxWatcher
from application.verification.services.multi_source_watcher import (
    MultiSourceWatcher,
    WatcherFactory,
)

__all__ = [
    "MailboxWatcher",
    "MultiSourceWatcher",
    "WatcherFactory",
]
