"""Verification 命令模块"""

from application.commands.verification.retrieve_code import (
    CodeSource,
    RetrieveCodeCommand,
    RetrieveCodeResult,
    RetrieveCodeHandler,
)

__all__ = [
    "CodeSource",
    "RetrieveCodeCommand",
    "RetrieveCodeResult",
    "RetrieveCodeHandler",
]
