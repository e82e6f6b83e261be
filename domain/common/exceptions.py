"""领域层通用异常"""

from typing import Any


class DomainException(Exception):
    """领域异常基类"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidValueObjectException(DomainException):
    """值对象校验失败"""

    def __init__(self, value_object_type: str, value: Any, reason: str):
        self.value_object_type = value_object_type
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {value_object_type}: {reason}")
