"""
EPUB生成ツールのメインモジュール。

番号付きMarkdownファイルが格納されたフォルダから、表紙付きのEPUB2を生成する。
"""
import argparse
import sys
from datetime import datetime
from pathlib import Path

from core import logger
from core.config import CHAPTER_SUFFIX, EPUB_SUFFIX
from core.exceptions import EpubGenerationError, NoContentError
from core.messages import msg
from core.metadata_reader import (
    BookMetadata,
    get_metadata_path_for_folder,
    load_metadata_for_folder,
    MetadataFileNotFoundError,
    MetadataTitleMissingError,
    parse_metadata_file,
)
from epub.builder import write_epub
from parsers.chapters import load_chapters


# =============================================================================
# ユーティリティ関数
# =============================================================================

def default_output_path(chapters_dir: Path) -> Path:
    """章フォルダと同じ階層に「フォルダ名.epub」の出力パスを返す。"""
    return chapters_dir.parent / f"{chapters_dir.name}{EPUB_SUFFIX}"


def resolve_metadata(chapters_dir: Path, title: str | None, author: str | None) -> BookMetadata:
    """
    コマンドライン引数と書誌情報ファイルからタイトルと著者を決定する。

    引数で指定された値を優先し、未指定の項目だけを書誌情報ファイルから補う。

    Raises
    ------
    EpubGenerationError
        タイトルがどちらにも指定されていない場合。
    MetadataTitleMissingError
        タイトルが引数になく、書誌情報ファイルにもタイトルがない場合。
    """
    if title and author is not None:
        return BookMetadata(title=title, creator=author)

    metadata_path = get_metadata_path_for_folder(chapters_dir)
    try:
        metadata = load_metadata_for_folder(chapters_dir)
        logger.info(msg("metadata_loaded", path=metadata_path))
    except MetadataFileNotFoundError:
        if not title:
            raise EpubGenerationError(msg("title_missing"))
        metadata = BookMetadata(title=title)
    except MetadataTitleMissingError:
        if not title:
            raise
        # タイトルは引数を使い、著者だけを書誌情報ファイルから補う
        fields = parse_metadata_file(metadata_path)
        metadata = BookMetadata(title=title, creator=fields.get("creator", ""))
        logger.info(msg("metadata_loaded", path=metadata_path))

    return BookMetadata(
        title=title or metadata.title,
        creator=author if author is not None else metadata.creator,
    )


def _log_processing_start(start_time: datetime) -> None:
    """処理開始ログを出力する。"""
    logger.info(msg("processing_start", time=start_time.strftime('%Y-%m-%d %H:%M:%S')))


def _log_processing_end(start_time: datetime, output_epub: Path) -> None:
    """処理終了ログを出力する。"""
    end_time = datetime.now()
    logger.separator("=", 50)
    logger.info(msg("processing_end", time=end_time.strftime('%Y-%m-%d %H:%M:%S')))
    logger.info(msg("elapsed_time", time=end_time - start_time))
    logger.info(msg("output_file", path=output_epub))


# =============================================================================
# 処理関数
# =============================================================================

def process_chapters_folder(
    chapters_dir: str | Path,
    output: str | Path | None = None,
    title: str | None = None,
    author: str | None = None,
    cover: str | Path | None = None,
) -> Path:
    """章フォルダからEPUBを生成する。"""
    folder_path = Path(chapters_dir)
    start_time = datetime.now()
    _log_processing_start(start_time)

    metadata = resolve_metadata(folder_path, title, author)

    # 空ファイルだけのフォルダも章なしとして扱う
    chapters = load_chapters(folder_path)
    if not chapters:
        raise NoContentError(msg("no_chapters_in_folder", folder=folder_path, ext=CHAPTER_SUFFIX))

    output_epub = Path(output) if output else default_output_path(folder_path)
    write_epub(output_epub, metadata.title, metadata.creator, chapters, cover)

    _log_processing_end(start_time, output_epub)
    return output_epub


# =============================================================================
# メイン関数
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを作成する。"""
    parser = argparse.ArgumentParser(
        prog="md2epub",
        description="Convert a folder of numbered Markdown chapters into an EPUB 2.0 book.",
    )
    parser.add_argument("chapters_dir", help="Folder containing chapter files (1.md, 2.md, 2.1.md, ...)")
    parser.add_argument("-o", "--output", help="Output EPUB path (default: <folder>.epub)")
    parser.add_argument("-t", "--title", help="Book title (default: from <folder>_metadata.txt)")
    parser.add_argument("-a", "--author", help="Author name (default: from <folder>_metadata.txt)")
    parser.add_argument("-c", "--cover", help="Cover image (JPEG); ignored if the file does not exist")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    """EPUB生成ツールのメイン処理。終了コードを返す。"""
    args = build_parser().parse_args(argv)
    logger.set_verbose(args.verbose)

    logger.separator("=")
    logger.info(msg("tool_title"))
    logger.separator("=")

    try:
        process_chapters_folder(args.chapters_dir, args.output, args.title, args.author, args.cover)
    except MetadataTitleMissingError as e:
        logger.error(str(e))
        return 1
    except EpubGenerationError as e:
        logger.error(str(e))
        logger.info(msg("processing_aborted"))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
