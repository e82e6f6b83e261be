"""验证码值对象"""

from dataclasses import dataclass

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException


@dataclass(frozen=True)
class VerificationCode(BaseValueObject):
    """
    验证码值对象

    从邮件中提取的 6 位数字，提取后不可变。

    Attributes:
        value: 6 位数字字符串
    """

    LENGTH = 6

    value: str

    def validate(self) -> None:
        """验证码必须是 6 位 ASCII 数字"""
        if (
            not isinstance(self.value, str)
            or len(self.value) != self.LENGTH
            or not self.value.isascii()
            or not self.value.isdigit()
        ):
            raise InvalidValueObjectException(
                value_object_type="VerificationCode",
                value=self.value,
                reason=f"Verification code must be exactly {self.LENGTH} digits",
            )

    def __str__(self) -> str:
        return self.value
