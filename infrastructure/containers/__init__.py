"""
依赖注入容器

用法:
    container = create_container()
    handler = container.app.retrieve_code_handler(consumer=browser_driver)
    result = await handler.handle(RetrieveCodeCommand(timeout=60))
"""

from typing import Optional

from dependency_injector import containers, providers

from infrastructure.config.settings import Settings
from infrastructure.containers.application import AppContainer, build_watcher_factory
from infrastructure.containers.config import ConfigContainer
from infrastructure.containers.infrastructure import InfraContainer


class ApplicationContainer(containers.DeclarativeContainer):
    """根容器 - 组装配置、基础设施和应用容器"""

    config = providers.Container(ConfigContainer)

    infra = providers.Container(InfraContainer, config=config)

    app = providers.Container(AppContainer, config=config, infra=infra)


def create_container(settings: Optional[Settings] = None) -> ApplicationContainer:
    """
    创建根容器

    Args:
        settings: 可选的配置实例，默认从环境变量读取

    Returns:
        ApplicationContainer
    """
    container = ApplicationContainer()
    if settings is not None:
        container.config.settings.override(providers.Object(settings))
    return container


__all__ = [
    "ApplicationContainer",
    "AppContainer",
    "ConfigContainer",
    "InfraContainer",
    "build_watcher_factory",
    "create_container",
]
