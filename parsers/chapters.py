"""
章ファイル読み込みモジュール。

フォルダ内のMarkdownファイルを番号順に並べ、
各ファイルの1行目を章タイトル、2行目以降を本文として読み込みます。
"""
import re
from dataclasses import dataclass
from pathlib import Path

from core import logger
from core.config import CHAPTER_SUFFIX
from core.exceptions import ChapterSourceError
from core.messages import msg


# ファイル名先頭の章番号パターン: 「2」「2.1」など
CHAPTER_NUMBER_PATTERN = re.compile(r'^(\d+)(?:\.(\d+))?')

# タイトル行の先頭から取り除く文字（見出し記号、空白、角括弧）
_TITLE_LEADING_CHARS = "# ["


@dataclass(frozen=True)
class Chapter:
    """章のタイトルと本文（Markdownのまま）を保持するデータクラス。"""
    title: str
    content: str


def chapter_sort_key(path: Path) -> tuple[int, int, int, str]:
    """
    章ファイルの並べ替えキーを返す。

    ファイル名（拡張子なし）の先頭の数字を (章番号, 節番号) として数値比較する。
    数字で始まらないファイルは番号付きファイルの後ろに並び、
    同じキー同士はファイル名順になる。

    Examples
    --------
    >>> sorted(["10.md", "2.1.md", "1.md", "2.md"], key=lambda n: chapter_sort_key(Path(n)))
    ['1.md', '2.md', '2.1.md', '10.md']
    """
    match = CHAPTER_NUMBER_PATTERN.match(path.stem)
    if match:
        main_number = int(match.group(1))
        sub_number = int(match.group(2)) if match.group(2) else 0
        return 0, main_number, sub_number, path.name
    return 1, 0, 0, path.name


def find_chapter_files(directory: str | Path) -> list[Path]:
    """
    フォルダ直下の章ファイルを番号順に列挙する（サブフォルダは対象外）。

    Raises
    ------
    ChapterSourceError
        フォルダが存在しない、またはフォルダを読み込めない場合。
    """
    folder = Path(directory)
    if not folder.is_dir():
        raise ChapterSourceError(msg("folder_not_found", path=folder), str(folder))

    try:
        files = [
            p for p in folder.iterdir()
            if p.is_file() and p.suffix.lower() == CHAPTER_SUFFIX
        ]
    except OSError as e:
        raise ChapterSourceError(msg("folder_unreadable", path=folder, error=e), str(folder)) from e

    return sorted(files, key=chapter_sort_key)


def parse_title_line(line: str) -> str:
    """タイトル行から先頭の「#」「 」「[」と末尾の「]」を1つ取り除く。"""
    title = line.lstrip(_TITLE_LEADING_CHARS)
    if title.endswith("]"):
        title = title[:-1]
    return title


def parse_chapter_text(text: str) -> Chapter | None:
    """
    章ファイルの内容をタイトルと本文に分割する。

    Parameters
    ----------
    text : str
        ファイル全体のテキスト。

    Returns
    -------
    Chapter | None
        1行もない（空の）場合は None。
    """
    # 改行は LF のみで区切る（U+2028 や改ページ文字は行内の文字として残す）
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    if not lines:
        return None
    return Chapter(title=parse_title_line(lines[0].rstrip("\r")), content="\n".join(lines[1:]))


def read_chapter_file(path: str | Path) -> Chapter | None:
    """
    章ファイルを1つ読み込む。

    Raises
    ------
    ChapterSourceError
        ファイルを読み込めない場合。
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ChapterSourceError(msg("chapter_unreadable", path=path, error=e), str(path)) from e
    return parse_chapter_text(text)


def load_chapters(directory: str | Path) -> list[Chapter]:
    """
    フォルダ内の章ファイルをすべて読み込み、番号順の章リストを返す。

    空のファイルは章として扱わずに読み飛ばす。

    Parameters
    ----------
    directory : str | Path
        章ファイル（*.md）が格納されたフォルダ。

    Returns
    -------
    list[Chapter]
        ファイル名の番号順に並んだ章のリスト。
    """
    chapters: list[Chapter] = []
    for path in find_chapter_files(directory):
        chapter = read_chapter_file(path)
        if chapter is None:
            logger.debug(msg("chapter_skipped_empty", name=path.name))
            continue
        logger.debug(msg("chapter_loaded", name=path.name, title=chapter.title))
        chapters.append(chapter)

    logger.info(msg("chapter_count", count=len(chapters)))
    return chapters
