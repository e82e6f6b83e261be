"""邮件领域服务接口"""

from domain.mail.services.mailbox_client import MailboxClient

__all__ = ["MailboxClient"]
