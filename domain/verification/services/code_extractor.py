"""验证码提取领域服务"""

import re
from typing import List, Optional

from domain.verification.value_objects.verification_code import VerificationCode


class VerificationCodeExtractor:
    """
    从纯文本邮件正文中提取验证码

    规则：
    1. 找出所有恰好 6 位的连续数字（前后不能紧邻其他数字）
    2. 正文中必须出现验证相关的上下文关键字，否则视为无关数字（订单号、电话等）
    3. 满足以上条件时返回文档顺序中的第一个匹配
    """

    CODE_PATTERN = re.compile(r"(?<!\d)(\d{6})(?!\d)")
    CONTEXT_PATTERN = re.compile(
        r"verification|code|confirm|security|enter.*below|enter.*next",
        re.IGNORECASE,
    )

    def find_candidates(self, text: str) -> List[str]:
        """返回所有 6 位数字串，按出现顺序"""
        if not text:
            return []
        return self.CODE_PATTERN.findall(text)

    def has_context(self, text: str) -> bool:
        """正文是否包含验证码上下文关键字"""
        return bool(text) and self.CONTEXT_PATTERN.search(text) is not None

    def extract(self, text: str) -> Optional[VerificationCode]:
        """
        提取验证码

        Args:
            text: 邮件纯文本正文

        Returns:
            VerificationCode，未找到时返回 None
        """
        candidates = self.find_candidates(text)
        if not candidates:
            return None

        if not self.has_context(text):
            return None

        return VerificationCode(candidates[0])
