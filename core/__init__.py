"""
コアモジュール。

共通の例外、ロガー、設定、メタデータ読み込みを提供する。
"""
from core.exceptions import (
    EpubGenerationError,
    EpubIOError,
    ChapterSourceError,
    EpubWriteError,
    NoContentError,
)
from core.logger import (
    debug, info, warning, error, success, section, separator,
    set_log_level, set_verbose, LogLevel
)
from core.config import (
    CHAPTER_SUFFIX,
    EPUB_MIMETYPE,
    EPUB_LANG,
)
from core.metadata_reader import (
    BookMetadata,
    load_metadata_for_folder,
    MetadataFileNotFoundError,
    MetadataTitleMissingError,
)

__all__ = [
    # exceptions
    "EpubGenerationError", "EpubIOError", "ChapterSourceError",
    "EpubWriteError", "NoContentError",
    # logger
    "debug", "info", "warning", "error", "success", "section", "separator",
    "set_log_level", "set_verbose", "LogLevel",
    # config
    "CHAPTER_SUFFIX", "EPUB_MIMETYPE", "EPUB_LANG",
    # metadata_reader
    "BookMetadata", "load_metadata_for_folder",
    "MetadataFileNotFoundError", "MetadataTitleMissingError",
]
