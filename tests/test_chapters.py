from pathlib import Path

import pytest

from core.exceptions import ChapterSourceError, EpubGenerationError
from parsers.chapters import (
    Chapter,
    chapter_sort_key,
    find_chapter_files,
    load_chapters,
    parse_chapter_text,
    parse_title_line,
    read_chapter_file,
)


def test_sort_key_orders_numeric_prefixes():
    names = ["10.md", "2.1.md", "1.md", "2.md"]
    ordered = sorted(names, key=lambda n: chapter_sort_key(Path(n)))
    assert ordered == ["1.md", "2.md", "2.1.md", "10.md"]


def test_sort_key_puts_unnumbered_files_last():
    names = ["notes.md", "3.md", "afterword.md", "1.md"]
    ordered = sorted(names, key=lambda n: chapter_sort_key(Path(n)))
    assert ordered[:2] == ["1.md", "3.md"]
    assert set(ordered[2:]) == {"notes.md", "afterword.md"}


def test_sort_key_handles_prefix_followed_by_text():
    assert chapter_sort_key(Path("3-intro.md"))[:3] == (0, 3, 0)
    assert chapter_sort_key(Path("3.2 scene.md"))[:3] == (0, 3, 2)


@pytest.mark.parametrize("line, expected", [
    ("# Intro", "Intro"),
    ("## [Chapter One]", "Chapter One"),
    ("[Bracketed]", "Bracketed"),
    ("Plain title", "Plain title"),
    ("# Ends]]", "Ends]"),
])
def test_parse_title_line(line, expected):
    assert parse_title_line(line) == expected


def test_parse_chapter_text_splits_title_and_body():
    chapter = parse_chapter_text("# Intro\nHello world\n\nSecond paragraph")
    assert chapter == Chapter(title="Intro", content="Hello world\n\nSecond paragraph")


def test_parse_chapter_text_empty_returns_none():
    assert parse_chapter_text("") is None


def test_parse_chapter_text_title_only():
    assert parse_chapter_text("# Lonely\n") == Chapter(title="Lonely", content="")


def test_parse_chapter_text_splits_only_on_line_feed():
    chapter = parse_chapter_text("# Part\u2028One\nBody\x0cmore\n")
    assert chapter.title == "Part\u2028One"
    assert chapter.content == "Body\x0cmore"


def test_parse_chapter_text_keeps_trailing_blank_lines_but_one():
    chapter = parse_chapter_text("# T\nBody\n\n")
    assert chapter.content == "Body\n"


def test_chapter_is_immutable():
    chapter = Chapter(title="a", content="b")
    with pytest.raises(AttributeError):
        chapter.title = "c"


def test_read_chapter_file_strips_bom_and_crlf(tmp_path):
    path = tmp_path / "1.md"
    path.write_bytes("\ufeff# Title\r\nLine one\r\nLine two\r\n".encode("utf-8"))
    chapter = read_chapter_file(path)
    assert chapter.title == "Title"
    assert chapter.content == "Line one\nLine two"


def test_find_chapter_files_is_non_recursive_and_filters_extension(chapters_dir):
    (chapters_dir / "3.txt").write_text("# Not markdown\n", encoding="utf-8")
    nested = chapters_dir / "4"
    nested.mkdir()
    (nested / "4.md").write_text("# Nested\n", encoding="utf-8")

    names = [p.name for p in find_chapter_files(chapters_dir)]
    assert names == ["1.md", "2.md", "2.1.md", "10.md", "appendix.md"]


def test_load_chapters_orders_and_skips_empty_files(chapters_dir):
    (chapters_dir / "5.md").write_text("", encoding="utf-8")

    chapters = load_chapters(chapters_dir)

    assert [c.title for c in chapters] == ["Intro", "Two", "Two point one", "Ten", "Appendix"]
    assert chapters[0].content == "Hello world"
    assert chapters[2].content == "### Sub\n\nBody"


def test_load_chapters_missing_directory_raises_chapter_source_error(tmp_path):
    missing = tmp_path / "missing"
    with pytest.raises(ChapterSourceError) as excinfo:
        load_chapters(missing)
    assert excinfo.value.source_path == str(missing)
    assert str(missing) in str(excinfo.value)
    # the error stays catchable as OSError and as the package base class
    assert isinstance(excinfo.value, OSError)
    assert isinstance(excinfo.value, EpubGenerationError)


def test_find_chapter_files_rejects_regular_file(tmp_path):
    not_a_folder = tmp_path / "1.md"
    not_a_folder.write_text("# One\n", encoding="utf-8")
    with pytest.raises(ChapterSourceError) as excinfo:
        find_chapter_files(not_a_folder)
    assert excinfo.value.source_path == str(not_a_folder)


def test_read_chapter_file_undecodable_raises(tmp_path):
    path = tmp_path / "1.md"
    path.write_bytes(b"# Title\n\xff\xfe\xfa")
    with pytest.raises(ChapterSourceError) as excinfo:
        read_chapter_file(path)
    assert excinfo.value.source_path == str(path)
