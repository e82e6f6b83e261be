"""原始邮件转纯文本"""

import email
import email.message
import re
from typing import Optional, Tuple

from bs4 import BeautifulSoup


_WHITESPACE_NEWLINE_PATTERN = re.compile(r"\s*\n\s*")
_MULTIPLE_SPACES_PATTERN = re.compile(r"[ \t]+")


def to_plain_text(raw_source: bytes) -> str:
    """
    把原始 RFC 822 邮件转换为纯文本

    优先使用第一个非附件的 text/plain 部分，
    没有纯文本时把第一个 text/html 部分转换为文本。

    Args:
        raw_source: 原始邮件字节

    Returns:
        纯文本正文，无法解析时返回空字符串
    """
    if not raw_source:
        return ""

    msg = email.message_from_bytes(raw_source)
    body_text, body_html = extract_body(msg)

    if body_text and body_text.strip():
        return body_text.strip()
    if body_html:
        return html_to_text(body_html)
    return ""


def extract_body(msg: email.message.Message) -> Tuple[Optional[str], Optional[str]]:
    """
    提取邮件正文（纯文本和 HTML）

    Args:
        msg: 邮件消息对象

    Returns:
        (纯文本正文, HTML 正文) 元组
    """
    body_text: Optional[str] = None
    body_html: Optional[str] = None

    for part in msg.walk():
        if part.is_multipart():
            continue

        # 跳过附件
        if "attachment" in str(part.get("Content-Disposition", "")):
            continue

        content_type = part.get_content_type()
        if content_type == "text/plain" and body_text is None:
            body_text = _decode_part(part)
        elif content_type == "text/html" and body_html is None:
            body_html = _decode_part(part)

    return body_text, body_html


def html_to_text(html: str) -> str:
    """HTML 转纯文本并规整空白"""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "head"]):
        tag.decompose()
    text = soup.get_text("\n", strip=True)
    text = _WHITESPACE_NEWLINE_PATTERN.sub("\n", text)
    text = _MULTIPLE_SPACES_PATTERN.sub(" ", text)
    return text.strip()


def _decode_part(part: email.message.Message) -> Optional[str]:
    payload = part.get_payload(decode=True)
    if payload is None:
        return None

    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="replace")
    except (LookupError, UnicodeDecodeError):
        return payload.decode("utf-8", errors="replace")
