"""邮箱客户端接口"""

from abc import ABC, abstractmethod
from typing import List

from domain.mail.value_objects.candidate_message import CandidateMessage
from domain.mail.value_objects.search_criteria import SearchCriteria


class MailboxClient(ABC):
    """
    邮箱客户端接口

    定义对单个邮箱的只读访问契约。一个客户端实例只持有一个会话，
    由对应的 MailboxWatcher 独占使用。
    具体实现在基础设施层，负责：
    - TLS 连接与登录
    - 按条件搜索邮件 UID
    - 按 UID 拉取原始邮件（不修改已读状态）
    """

    @property
    @abstractmethod
    def host(self) -> str:
        """服务器地址"""
        raise NotImplementedError

    @property
    @abstractmethod
    def port(self) -> int:
        """服务器端口"""
        raise NotImplementedError

    @property
    @abstractmethod
    def label(self) -> str:
        """用于日志的连接描述（不含密码）"""
        raise NotImplementedError

    @abstractmethod
    async def connect(self) -> None:
        """
        建立已认证的会话

        Raises:
            MailboxConnectionError: 网络、TLS 或认证失败
        """
        raise NotImplementedError

    @abstractmethod
    async def search(self, criteria: SearchCriteria) -> List[int]:
        """
        搜索符合条件的邮件

        Args:
            criteria: 搜索条件

        Returns:
            匹配邮件的 UID 列表（顺序不保证）

        Raises:
            MailboxSessionError: 会话中断或服务器报错
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch(self, uid: int) -> CandidateMessage:
        """
        拉取单封原始邮件

        Args:
            uid: 邮件 UID

        Returns:
            CandidateMessage

        Raises:
            MailboxSessionError: 会话中断或服务器报错
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """释放会话，未连接时不做任何事，不抛出异常"""
        raise NotImplementedError
