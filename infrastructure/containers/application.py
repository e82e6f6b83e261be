"""
应用容器（AppContainer）

管理应用层组件：邮箱监听器、多来源监听器、命令处理器。
依赖 InfraContainer 获取基础设施。
"""

import logging
from datetime import timedelta
from typing import Callable, TYPE_CHECKING

from dependency_injector import containers, providers

from application.commands.verification.retrieve_code import RetrieveCodeHandler
from application.verification.services.mailbox_watcher import MailboxWatcher
from application.verification.services.multi_source_watcher import (
    MultiSourceWatcher,
    WatcherFactory,
)
from domain.common.clock import Clock
from domain.mail.services.mailbox_client import MailboxClient
from domain.mailbox.value_objects.mailbox_credentials import MailboxCredentials
from domain.mailbox.value_objects.source_name import SourceName
from domain.verification.services.code_extractor import VerificationCodeExtractor

if TYPE_CHECKING:
    from .infrastructure import InfraContainer


def build_watcher_factory(
    client_factory: Callable[..., MailboxClient],
    text_converter: Callable[[bytes], str],
    clock: Clock,
    extractor: VerificationCodeExtractor,
    sender_address: str,
    poll_interval: float,
    search_window_hours: float,
) -> WatcherFactory:
    """
    构造按来源创建 MailboxWatcher 的工厂

    每个来源使用独立的客户端和以来源名称结尾的 logger。
    """

    def create(name: SourceName, credentials: MailboxCredentials) -> MailboxWatcher:
        return MailboxWatcher(
            client=client_factory(credentials=credentials),
            text_converter=text_converter,
            clock=clock,
            extractor=extractor,
            sender_address=sender_address,
            poll_interval=poll_interval,
            search_window=timedelta(hours=search_window_hours),
            logger=logging.getLogger(f"{MailboxWatcher.__module__}.{name.value}"),
        )

    return create


class AppContainer(containers.DeclarativeContainer):
    """应用容器 - 管理应用层服务"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # 依赖基础设施容器
    infra = providers.DependenciesContainer()

    # ============ 监听器 ============

    watcher_factory = providers.Singleton(
        build_watcher_factory,
        client_factory=infra.mailbox_client.provider,
        text_converter=infra.text_converter,
        clock=infra.clock,
        extractor=infra.code_extractor,
        sender_address=config.settings.provided.verification_sender,
        poll_interval=config.settings.provided.poll_interval,
        search_window_hours=config.settings.provided.search_window_hours,
    )

    multi_source_watcher = providers.Factory(
        MultiSourceWatcher,
        sources=config.settings.provided.sources_config.call(),
        watcher_factory=watcher_factory,
        clock=infra.clock,
        round_timeout=config.settings.provided.round_timeout,
        poll_interval=config.settings.provided.poll_interval,
    )

    # ============ 命令处理器 ============

    # consumer（浏览器驱动）在调用时传入
    retrieve_code_handler = providers.Factory(
        RetrieveCodeHandler,
        source=multi_source_watcher,
        clock=infra.clock,
    )
