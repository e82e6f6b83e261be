"""验证码检索应用层模块"""

from application.verification.services import (
    MailboxWatcher,
    MultiSourceWatcher,
    WatcherFactory,
)

__all__ = [
    "MailboxWatcher",
    "MultiSourceWatcher",
    "WatcherFactory",
]
