"""
入力パースモジュール。

章フォルダ内のMarkdownファイルの読み込みを提供する。
"""
from parsers.chapters import (
    Chapter,
    chapter_sort_key,
    find_chapter_files,
    parse_chapter_text,
    read_chapter_file,
    load_chapters,
)

__all__ = [
    "Chapter",
    "chapter_sort_key",
    "find_chapter_files",
    "parse_chapter_text",
    "read_chapter_file",
    "load_chapters",
]
