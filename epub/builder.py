"""
章フォルダのMarkdownファイルからEPUB2を生成するモジュール。

章の読み込み、各文書の生成、ZIPパッケージングまでを
1回の呼び出しで行います。
"""
import uuid
from pathlib import Path
from typing import Callable, Sequence

from core import logger
from core.config import chapter_filename, oebps_path
from core.messages import msg
from epub.packaging import EpubWriter
from epub.templates import (
    DOCUMENT_PATHS,
    generate_chapter_xhtml,
    generate_container_xml,
    generate_content_opf,
    generate_cover_xhtml,
    generate_css,
    generate_toc_ncx,
    new_identifier,
)
from parsers.chapters import Chapter, load_chapters


def has_cover_image(cover_image_path: str | Path | None) -> bool:
    """表紙画像のパスが指定され、かつファイルが存在するかどうかを返す。"""
    if not cover_image_path:
        return False
    return Path(cover_image_path).is_file()


def create_epub(
    output_path: str | Path,
    title: str,
    author: str,
    chapters_dir: str | Path,
    cover_image_path: str | Path | None = None,
    *,
    id_factory: Callable[[], uuid.UUID] = uuid.uuid4
) -> Path:
    """
    章フォルダのMarkdownファイルからEPUB2ファイルを生成する。

    出力先に既存のファイルがあれば上書きする。
    章の読み込みに失敗した場合は、出力ファイルを作成する前に中断する。

    Parameters
    ----------
    output_path : str | Path
        出力EPUBファイルのパス。
    title : str
        書籍のタイトル。
    author : str
        著者名。
    chapters_dir : str | Path
        章ファイル（*.md）が格納されたフォルダ。
    cover_image_path : str | Path | None
        表紙画像（JPEG）のパス。未指定または存在しない場合は表紙なし。
    id_factory : Callable[[], uuid.UUID]
        識別子用のUUIDを返す関数。OPFとNCXで1回ずつ呼び出す。

    Returns
    -------
    Path
        生成したEPUBファイルのパス。

    Raises
    ------
    ChapterSourceError
        章フォルダまたは章ファイルを読み込めない場合。
    EpubWriteError
        出力ファイルの書き出し、または表紙画像の読み込みに失敗した場合。
    """
    # 章の読み込み（失敗時は出力前に中断）
    chapters = load_chapters(chapters_dir)
    return write_epub(output_path, title, author, chapters, cover_image_path,
                      id_factory=id_factory)


def write_epub(
    output_path: str | Path,
    title: str,
    author: str,
    chapters: Sequence[Chapter],
    cover_image_path: str | Path | None = None,
    *,
    id_factory: Callable[[], uuid.UUID] = uuid.uuid4
) -> Path:
    """
    読み込み済みの章からEPUB2ファイルを生成する。

    引数は ``create_epub`` と同じで、章フォルダの代わりに章のリストを受け取る。

    Notes
    -----
    アーカイブ内のエントリ順::

        mimetype（無圧縮）
        META-INF/container.xml
        OEBPS/content.opf
        OEBPS/toc.ncx
        OEBPS/cover.jpg, OEBPS/cover.xhtml（表紙がある場合）
        OEBPS/chapter1.xhtml ... chapterN.xhtml
        OEBPS/styles.css
    """
    output_path = Path(output_path)
    logger.section(msg("epub_start"))

    # 1. 表紙の有無を判定（存在しないパスは表紙なしとして扱う）
    has_cover = has_cover_image(cover_image_path)
    if cover_image_path and not has_cover:
        logger.warning(msg("epub_cover_missing", path=cover_image_path))

    # 2. パッケージング (ZIP)
    with EpubWriter(output_path) as writer:
        writer.write_mimetype()
        writer.write_text(DOCUMENT_PATHS["container"], generate_container_xml())
        writer.write_text(
            DOCUMENT_PATHS["opf"],
            generate_content_opf(title, author, chapters, has_cover,
                                 identifier=new_identifier(id_factory))
        )
        writer.write_text(
            DOCUMENT_PATHS["ncx"],
            generate_toc_ncx(title, chapters, has_cover,
                             identifier=new_identifier(id_factory))
        )

        if has_cover:
            writer.write_file(DOCUMENT_PATHS["cover_image"], cover_image_path)
            writer.write_text(DOCUMENT_PATHS["cover"], generate_cover_xhtml(title))
            logger.info(msg("epub_cover_added", path=cover_image_path))

        for i, chapter in enumerate(chapters, 1):
            writer.write_text(
                oebps_path(chapter_filename(i)),
                generate_chapter_xhtml(title, chapter.title, chapter.content)
            )

        writer.write_text(DOCUMENT_PATHS["css"], generate_css())

    logger.success(msg("epub_saved", file=output_path))
    return output_path
