"""邮箱来源枚举"""

from enum import Enum


class SourceName(str, Enum):
    """邮箱来源

    定义顺序即为多来源竞争时的优先顺序。
    """

    PRIMARY = "primary"
    """主邮箱（默认 Gmail）"""

    SECONDARY = "secondary"
    """备用邮箱（自建邮件服务器）"""

    @property
    def priority(self) -> int:
        """数值越小优先级越高"""
        return list(SourceName).index(self)
