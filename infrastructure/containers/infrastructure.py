"""
基础设施容器（InfraContainer）

管理所有基础设施组件：时钟、邮件解析、验证码提取、IMAP 客户端等。
依赖 ConfigContainer 获取配置。
"""

from dependency_injector import containers, providers

from domain.verification.services.code_extractor import VerificationCodeExtractor
from infrastructure.clock.system_clock import SystemClock
from infrastructure.mail.parsing.plain_text_converter import to_plain_text
from infrastructure.mail.services.imap_mailbox_client_impl import ImapMailboxClient


class InfraContainer(containers.DeclarativeContainer):
    """基础设施容器 - 管理技术实现"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # ============ 时钟 ============

    clock = providers.Singleton(SystemClock)

    # ============ 邮件解析 ============

    # 原始邮件转纯文本
    text_converter = providers.Object(to_plain_text)

    # 验证码提取器（无状态，单例）
    code_extractor = providers.Singleton(VerificationCodeExtractor)

    # ============ IMAP 客户端 ============

    # 每个来源一个客户端（调用时传入 credentials）
    mailbox_client = providers.Factory(
        ImapMailboxClient,
        timeout=config.settings.provided.imap_timeout,
    )
