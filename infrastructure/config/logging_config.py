"""日志配置"""

import logging
import sys
from pathlib import Path
from typing import Optional

from infrastructure.config.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings, stream=None) -> logging.Logger:
    """
    按配置初始化根日志记录器

    Args:
        settings: 应用配置（使用 log_level 和 log_file）
        stream: 控制台输出流，默认 stderr

    Returns:
        根日志记录器
    """
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def _parse_level(level: Optional[str]) -> int:
    value = logging.getLevelName((level or "INFO").upper())
    return value if isinstance(value, int) else logging.INFO
