"""
EPUB2生成ツールの設定定数モジュール。

プロジェクト全体で使用される設定値を一元管理します。
"""

# --- 入力設定 ---
CHAPTER_SUFFIX = ".md"  # 章ファイルの拡張子（大文字小文字は区別しない）
METADATA_SUFFIX = "_metadata.txt"  # 書誌情報ファイル名の接尾辞

# --- EPUB設定 ---
EPUB_MIMETYPE = "application/epub+zip"
EPUB_LANG = "en"  # dc:language は固定
EPUB_SUFFIX = ".epub"

# --- アーカイブ内のパス ---
MIMETYPE_PATH = "mimetype"
CONTAINER_PATH = "META-INF/container.xml"
OEBPS_DIR = "OEBPS"
OPF_FILENAME = "content.opf"
NCX_FILENAME = "toc.ncx"
CSS_FILENAME = "styles.css"
COVER_IMAGE_NAME = "cover.jpg"
COVER_XHTML_NAME = "cover.xhtml"

# --- メディアタイプ ---
MEDIA_TYPE_OPF = "application/oebps-package+xml"
MEDIA_TYPE_NCX = "application/x-dtbncx+xml"
MEDIA_TYPE_CSS = "text/css"
MEDIA_TYPE_XHTML = "application/xhtml+xml"
MEDIA_TYPE_JPEG = "image/jpeg"

# ZIPエントリの更新日時（固定値にして、識別子以外の出力を再現可能にする）
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def chapter_filename(number: int) -> str:
    """章番号（1始まり）からXHTMLファイル名を返す。"""
    return f"chapter{number}.xhtml"


def oebps_path(filename: str) -> str:
    """OEBPS配下のアーカイブ内パスを返す。"""
    return f"{OEBPS_DIR}/{filename}"
