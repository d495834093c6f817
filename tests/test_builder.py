import re
import uuid
import zipfile
from pathlib import Path

import pytest

from core.exceptions import ChapterSourceError, EpubWriteError
from epub.builder import create_epub, has_cover_image, write_epub
from parsers.chapters import Chapter

URN_UUID = re.compile(r"urn:uuid:[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}")


def _entries(path: Path) -> list[str]:
    with zipfile.ZipFile(path) as zf:
        return zf.namelist()


def test_entry_order_without_cover(tmp_path, chapters_dir):
    out = create_epub(tmp_path / "book.epub", "My Book", "Jane", chapters_dir)

    assert _entries(out) == [
        "mimetype",
        "META-INF/container.xml",
        "OEBPS/content.opf",
        "OEBPS/toc.ncx",
        "OEBPS/chapter1.xhtml",
        "OEBPS/chapter2.xhtml",
        "OEBPS/chapter3.xhtml",
        "OEBPS/chapter4.xhtml",
        "OEBPS/chapter5.xhtml",
        "OEBPS/styles.css",
    ]


def test_entry_order_with_cover(tmp_path, chapters_dir, cover_image):
    out = create_epub(tmp_path / "book.epub", "My Book", "Jane", chapters_dir, cover_image)

    names = _entries(out)
    assert names[:6] == [
        "mimetype",
        "META-INF/container.xml",
        "OEBPS/content.opf",
        "OEBPS/toc.ncx",
        "OEBPS/cover.jpg",
        "OEBPS/cover.xhtml",
    ]
    assert names[-1] == "OEBPS/styles.css"
    with zipfile.ZipFile(out) as zf:
        assert zf.read("OEBPS/cover.jpg") == cover_image.read_bytes()
        assert 'idref="cover"' in zf.read("OEBPS/content.opf").decode("utf-8")


def test_mimetype_first_and_uncompressed(tmp_path, chapters_dir):
    out = create_epub(tmp_path / "book.epub", "T", "A", chapters_dir)
    with zipfile.ZipFile(out) as zf:
        first = zf.infolist()[0]
        assert first.filename == "mimetype"
        assert first.compress_type == zipfile.ZIP_STORED
        assert zf.read(first) == b"application/epub+zip"


def test_chapter_entries_match_loaded_chapters(tmp_path, chapters_dir):
    out = create_epub(tmp_path / "book.epub", "T", "A", chapters_dir)
    numbers = sorted(
        int(m.group(1)) for m in (re.fullmatch(r"OEBPS/chapter(\d+)\.xhtml", n) for n in _entries(out)) if m
    )
    assert numbers == [1, 2, 3, 4, 5]


def test_spine_follows_file_number_order(tmp_path, chapters_dir):
    out = create_epub(tmp_path / "book.epub", "T", "A", chapters_dir)
    with zipfile.ZipFile(out) as zf:
        titles = [
            re.search(r"<h1>(.*?)</h1>", zf.read(f"OEBPS/chapter{i}.xhtml").decode("utf-8")).group(1)
            for i in range(1, 6)
        ]
    assert titles == ["Intro", "Two", "Two point one", "Ten", "Appendix"]


def test_first_chapter_body(tmp_path, chapters_dir):
    out = create_epub(tmp_path / "book.epub", "T", "A", chapters_dir)
    with zipfile.ZipFile(out) as zf:
        chapter = zf.read("OEBPS/chapter1.xhtml").decode("utf-8")
    assert "<p>Hello world</p>" in chapter
    assert chapter.count("<h1>") == 1
    assert "<title>T - Intro</title>" in chapter


def test_missing_cover_is_ignored(tmp_path, chapters_dir):
    out = create_epub(tmp_path / "book.epub", "T", "A", chapters_dir, tmp_path / "nope.jpg")
    names = _entries(out)
    assert "OEBPS/cover.jpg" not in names
    assert "OEBPS/cover.xhtml" not in names
    with zipfile.ZipFile(out) as zf:
        opf = zf.read("OEBPS/content.opf").decode("utf-8")
        ncx = zf.read("OEBPS/toc.ncx").decode("utf-8")
    assert "cover" not in opf
    assert "cover" not in ncx


def test_identifiers_are_fresh_but_structure_is_stable(tmp_path, chapters_dir):
    first = create_epub(tmp_path / "a.epub", "T", "A", chapters_dir)
    second = create_epub(tmp_path / "b.epub", "T", "A", chapters_dir)

    with zipfile.ZipFile(first) as za, zipfile.ZipFile(second) as zb:
        assert za.namelist() == zb.namelist()
        for name in za.namelist():
            a, b = za.read(name).decode("utf-8", "replace"), zb.read(name).decode("utf-8", "replace")
            ids_a, ids_b = URN_UUID.findall(a), URN_UUID.findall(b)
            assert len(ids_a) == len(ids_b)
            assert not set(ids_a) & set(ids_b)
            assert URN_UUID.sub("ID", a) == URN_UUID.sub("ID", b)

        opf_id = URN_UUID.search(za.read("OEBPS/content.opf").decode("utf-8")).group(0)
        ncx_id = URN_UUID.search(za.read("OEBPS/toc.ncx").decode("utf-8")).group(0)
        assert opf_id != ncx_id


def test_injected_identifier_factory_makes_output_reproducible(tmp_path, chapters_dir):
    def factory():
        return uuid.UUID("00000000-0000-4000-8000-000000000001")

    first = create_epub(tmp_path / "a.epub", "T", "A", chapters_dir, id_factory=factory)
    second = create_epub(tmp_path / "b.epub", "T", "A", chapters_dir, id_factory=factory)
    assert first.read_bytes() == second.read_bytes()


def test_factory_called_once_per_document(tmp_path, chapters_dir, fixed_uuids):
    out = create_epub(tmp_path / "a.epub", "T", "A", chapters_dir, id_factory=fixed_uuids)
    with zipfile.ZipFile(out) as zf:
        opf = zf.read("OEBPS/content.opf").decode("utf-8")
        ncx = zf.read("OEBPS/toc.ncx").decode("utf-8")
    assert str(uuid.UUID(int=1, version=4)) in opf
    assert str(uuid.UUID(int=2, version=4)) in ncx


def test_overwrites_existing_output(tmp_path, chapters_dir):
    out = tmp_path / "book.epub"
    out.write_text("old", encoding="utf-8")
    create_epub(out, "T", "A", chapters_dir)
    assert zipfile.is_zipfile(out)


def test_missing_chapter_dir_writes_nothing(tmp_path):
    out = tmp_path / "book.epub"
    with pytest.raises(OSError):
        create_epub(out, "T", "A", tmp_path / "missing")
    assert not out.exists()


def test_unreadable_chapter_aborts_before_output(tmp_path, chapters_dir):
    (chapters_dir / "3.md").write_bytes(b"# Bad\n\xff\xfe")
    out = tmp_path / "book.epub"
    with pytest.raises(ChapterSourceError):
        create_epub(out, "T", "A", chapters_dir)
    assert not out.exists()


def test_unwritable_output_raises(tmp_path, chapters_dir):
    with pytest.raises(EpubWriteError):
        create_epub(tmp_path / "missing" / "book.epub", "T", "A", chapters_dir)


def test_empty_directory_produces_book_without_chapters(tmp_path):
    folder = tmp_path / "empty"
    folder.mkdir()
    out = create_epub(tmp_path / "book.epub", "T", "A", folder)
    assert _entries(out) == [
        "mimetype",
        "META-INF/container.xml",
        "OEBPS/content.opf",
        "OEBPS/toc.ncx",
        "OEBPS/styles.css",
    ]


@pytest.mark.parametrize("value, expected", [(None, False), ("", False)])
def test_has_cover_image_empty_values(value, expected):
    assert has_cover_image(value) is expected


def test_has_cover_image_existing_file(cover_image):
    assert has_cover_image(cover_image) is True
    assert has_cover_image(str(cover_image)) is True


def test_write_epub_accepts_loaded_chapters(tmp_path, fixed_uuids):
    chapters = [Chapter(title="Only", content="Line")]
    out = write_epub(tmp_path / "book.epub", "T", "A", chapters, id_factory=fixed_uuids)
    with zipfile.ZipFile(out) as zf:
        assert "OEBPS/chapter1.xhtml" in zf.namelist()
        assert "<h1>Only</h1>" in zf.read("OEBPS/chapter1.xhtml").decode("utf-8")
