"""
テキスト処理モジュール。

章本文のXHTML変換を提供する。
"""
from text.xhtml import (
    HEADING_PREFIXES,
    escape_xml_text,
    convert_line,
    markdown_to_xhtml,
)

__all__ = [
    "HEADING_PREFIXES",
    "escape_xml_text",
    "convert_line",
    "markdown_to_xhtml",
]
