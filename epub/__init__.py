"""
EPUB生成モジュール。

EPUB2の生成、パッケージング、テンプレート生成を提供する。
"""
from epub.builder import create_epub, has_cover_image, write_epub
from epub.packaging import EpubWriter
from epub.templates import (
    new_identifier,
    generate_container_xml,
    generate_content_opf,
    generate_toc_ncx,
    generate_chapter_xhtml,
    generate_cover_xhtml,
    generate_css,
)

__all__ = [
    "create_epub",
    "write_epub",
    "has_cover_image",
    "EpubWriter",
    "new_identifier",
    "generate_container_xml",
    "generate_content_opf",
    "generate_toc_ncx",
    "generate_chapter_xhtml",
    "generate_cover_xhtml",
    "generate_css",
]
