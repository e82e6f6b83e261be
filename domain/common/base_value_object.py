"""值对象基类"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseValueObject:
    """
    值对象基类

    子类使用 @dataclass(frozen=True) 声明字段，
    构造完成后自动调用 validate() 校验不变量。
    """

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """校验值对象的有效性，子类按需覆盖"""
