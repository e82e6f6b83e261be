"""领域层通用基类与异常"""

from domain.common.base_value_object import BaseValueObject
from domain.common.clock import Clock
from domain.common.exceptions import DomainException, InvalidValueObjectException

__all__ = [
    "BaseValueObject",
    "Clock",
    "DomainException",
    "InvalidValueObjectException",
]
