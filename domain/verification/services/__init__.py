"""验证码领域服务"""

from domain.verification.services.code_extractor import VerificationCodeExtractor
from domain.verification.services.code_consumer import CodeConsumer

__all__ = [
    "VerificationCodeExtractor",
    "CodeConsumer",
]
