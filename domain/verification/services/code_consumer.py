"""验证码消费者接口"""

from typing import Protocol

from domain.verification.value_objects.verification_code import VerificationCode


class CodeConsumer(Protocol):
    """
    验证码消费者接口

    浏览器自动化驱动的抽象：拿到验证码后把它填入网页表单。
    本仓库只定义契约，具体实现由调用方提供。
    """

    async def submit_code(self, code: VerificationCode) -> None:
        """
        提交验证码

        Args:
            code: 检索到的验证码
        """
        ...
