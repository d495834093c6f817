"""
EPUB2用テンプレート生成モジュール。

container.xml、OPF、NCX、章XHTML、表紙XHTML、CSSの生成を共通化します。
いずれも文字列を返すだけの関数で、ファイル出力は行いません。
"""
import uuid
from html import escape
from typing import Callable, Sequence

from core.config import (
    CONTAINER_PATH,
    COVER_IMAGE_NAME,
    COVER_XHTML_NAME,
    CSS_FILENAME,
    EPUB_LANG,
    MEDIA_TYPE_CSS,
    MEDIA_TYPE_JPEG,
    MEDIA_TYPE_NCX,
    MEDIA_TYPE_OPF,
    MEDIA_TYPE_XHTML,
    NCX_FILENAME,
    OPF_FILENAME,
    chapter_filename,
    oebps_path,
)
from parsers.chapters import Chapter
from text.xhtml import markdown_to_xhtml


CSS_CONTENT = """body {
    font-family: Arial, sans-serif;
    margin: 5%;
    text-align: justify;
}

h1 {
    color: #1a1a1a;
    text-align: center;
}

p {
    text-indent: 1em;
    margin-bottom: 1em;
}
"""

XHTML11_DOCTYPE = ('<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" '
                   '"http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">')


def new_identifier(factory: Callable[[], uuid.UUID] = uuid.uuid4) -> str:
    """
    書籍識別子（urn:uuid 形式）を生成する。

    Parameters
    ----------
    factory : Callable[[], uuid.UUID]
        UUIDを返す関数。テストでは固定値を返す関数を渡せる。

    Returns
    -------
    str
        "urn:uuid:xxxxxxxx-xxxx-4xxx-xxxx-xxxxxxxxxxxx" 形式の文字列。
    """
    return f"urn:uuid:{factory()}"


def generate_container_xml() -> str:
    """META-INF/container.xml の内容を生成する。"""
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
    <rootfiles>
        <rootfile full-path="{oebps_path(OPF_FILENAME)}" media-type="{MEDIA_TYPE_OPF}"/>
    </rootfiles>
</container>
'''


def generate_content_opf(
    book_title: str,
    author: str,
    chapters: Sequence[Chapter],
    has_cover: bool,
    identifier: str | None = None
) -> str:
    """
    OPF 2.0 パッケージ文書（メタデータ、manifest、spine）を生成する。

    Parameters
    ----------
    book_title : str
        書籍のタイトル。
    author : str
        著者名（dc:creator、role="aut"）。
    chapters : Sequence[Chapter]
        番号順に並んだ章のリスト。spineの順序になる。
    has_cover : bool
        表紙画像と表紙XHTMLを含めるかどうか。
    identifier : str | None
        dc:identifier の値。Noneの場合は新しいUUIDを生成する。

    Returns
    -------
    str
        生成されたOPFドキュメント。
    """
    if identifier is None:
        identifier = new_identifier()

    cover_meta = ""
    manifest_items = [
        f'        <item id="ncx" href="{NCX_FILENAME}" media-type="{MEDIA_TYPE_NCX}"/>',
        f'        <item id="css" href="{CSS_FILENAME}" media-type="{MEDIA_TYPE_CSS}"/>',
    ]
    spine_items: list[str] = []

    if has_cover:
        cover_meta = '\n        <meta name="cover" content="cover-image"/>'
        manifest_items.append(
            f'        <item id="cover-image" href="{COVER_IMAGE_NAME}" media-type="{MEDIA_TYPE_JPEG}"/>'
        )
        manifest_items.append(
            f'        <item id="cover" href="{COVER_XHTML_NAME}" media-type="{MEDIA_TYPE_XHTML}"/>'
        )
        spine_items.append('        <itemref idref="cover"/>')

    for i in range(1, len(chapters) + 1):
        manifest_items.append(
            f'        <item id="chapter{i}" href="{chapter_filename(i)}" media-type="{MEDIA_TYPE_XHTML}"/>'
        )
        spine_items.append(f'        <itemref idref="chapter{i}"/>')

    return f'''<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="BookID" version="2.0">
    <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
        <dc:title>{escape(book_title)}</dc:title>
        <dc:creator opf:role="aut">{escape(author)}</dc:creator>
        <dc:language>{EPUB_LANG}</dc:language>
        <dc:identifier id="BookID" opf:scheme="UUID">{escape(identifier)}</dc:identifier>{cover_meta}
    </metadata>
    <manifest>
{chr(10).join(manifest_items)}
    </manifest>
    <spine toc="ncx">
{chr(10).join(spine_items)}
    </spine>
</package>
'''


def _generate_nav_point(point_id: str, play_order: int, label: str, src: str) -> str:
    """NCXのnavPoint要素を1つ生成する。"""
    return f'''        <navPoint id="{point_id}" playOrder="{play_order}">
            <navLabel>
                <text>{escape(label)}</text>
            </navLabel>
            <content src="{src}"/>
        </navPoint>'''


def generate_toc_ncx(
    book_title: str,
    chapters: Sequence[Chapter],
    has_cover: bool,
    identifier: str | None = None
) -> str:
    """
    NCX 目次文書を生成する。

    表紙がある場合は表紙を playOrder=1 とし、
    続けて各章を1ずつ増える playOrder で並べる。
    深さとページ数のメタデータは固定値（depth=1、ページ数=0）。

    Parameters
    ----------
    book_title : str
        書籍のタイトル（docTitle）。
    chapters : Sequence[Chapter]
        番号順に並んだ章のリスト。章タイトルが目次の表示名になる。
    has_cover : bool
        表紙のnavPointを含めるかどうか。
    identifier : str | None
        dtb:uid の値。Noneの場合は新しいUUIDを生成する（OPFとは別の値）。

    Returns
    -------
    str
        生成されたNCXドキュメント。
    """
    if identifier is None:
        identifier = new_identifier()

    nav_points: list[str] = []
    play_order = 1

    if has_cover:
        nav_points.append(_generate_nav_point("navpoint-cover", play_order, "Cover", COVER_XHTML_NAME))
        play_order += 1

    for i, chapter in enumerate(chapters, 1):
        nav_points.append(_generate_nav_point(f"navPoint-{i}", play_order, chapter.title, chapter_filename(i)))
        play_order += 1

    return f'''<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
    <head>
        <meta name="dtb:uid" content="{escape(identifier)}"/>
        <meta name="dtb:depth" content="1"/>
        <meta name="dtb:totalPageCount" content="0"/>
        <meta name="dtb:maxPageNumber" content="0"/>
    </head>
    <docTitle>
        <text>{escape(book_title)}</text>
    </docTitle>
    <navMap>
{chr(10).join(nav_points)}
    </navMap>
</ncx>
'''


def generate_chapter_xhtml(book_title: str, chapter_title: str, content: str) -> str:
    """
    章用XHTML 1.1ドキュメントを生成する。

    Parameters
    ----------
    book_title : str
        書籍のタイトル。
    chapter_title : str
        章タイトル（h1要素と<title>要素に使用）。
    content : str
        章本文（Markdown）。XHTMLブロック要素に変換して埋め込む。

    Returns
    -------
    str
        生成されたXHTMLドキュメント。
    """
    return f'''<?xml version="1.0" encoding="UTF-8"?>
{XHTML11_DOCTYPE}
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
    <title>{escape(book_title)} - {escape(chapter_title)}</title>
    <link rel="stylesheet" type="text/css" href="{CSS_FILENAME}"/>
</head>
<body>
    <h1>{escape(chapter_title)}</h1>
{markdown_to_xhtml(content)}
</body>
</html>
'''


def generate_cover_xhtml(book_title: str) -> str:
    """表紙画像を中央に表示するだけのXHTMLドキュメントを生成する。"""
    return f'''<?xml version="1.0" encoding="UTF-8"?>
{XHTML11_DOCTYPE}
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
    <title>{escape(book_title)}</title>
    <style type="text/css">
        body {{ margin: 0; padding: 0; text-align: center; }}
        img {{ max-width: 100%; max-height: 100%; }}
    </style>
</head>
<body>
    <div>
        <img src="{COVER_IMAGE_NAME}" alt="Cover"/>
    </div>
</body>
</html>
'''


def generate_css() -> str:
    """共通スタイルシートの内容を返す。"""
    return CSS_CONTENT


# 生成する文書とアーカイブ内パスの対応（container.xmlのみOEBPS外）
DOCUMENT_PATHS: dict[str, str] = {
    "container": CONTAINER_PATH,
    "opf": oebps_path(OPF_FILENAME),
    "ncx": oebps_path(NCX_FILENAME),
    "cover_image": oebps_path(COVER_IMAGE_NAME),
    "cover": oebps_path(COVER_XHTML_NAME),
    "css": oebps_path(CSS_FILENAME),
}
