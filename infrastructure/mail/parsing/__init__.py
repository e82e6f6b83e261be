"""邮件解析"""

from infrastructure.mail.parsing.plain_text_converter import (
    extract_body,
    html_to_text,
    to_plain_text,
)

__all__ = ["extract_body", "html_to_text", "to_plain_text"]
