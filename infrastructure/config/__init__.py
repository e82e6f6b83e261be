"""配置与日志"""

from infrastructure.config.settings import Settings, get_settings
from infrastructure.config.logging_config import configure_logging

__all__ = ["Settings", "get_settings", "configure_logging"]
