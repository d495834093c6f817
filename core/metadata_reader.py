"""
書誌情報ファイル読み取りモジュール。

章フォルダと同じ階層に置かれたメタデータファイルから
書籍のタイトルと著者を読み取り、EPUB生成に使用します。
"""
from dataclasses import dataclass
from pathlib import Path

from core.config import METADATA_SUFFIX
from core.messages import msg


class MetadataFileNotFoundError(Exception):
    """書誌情報ファイルが見つからない場合の例外。"""

    def __init__(self, metadata_path: str):
        self.metadata_path = metadata_path
        super().__init__(msg("metadata_not_found", path=metadata_path))


class MetadataTitleMissingError(Exception):
    """書誌情報にタイトルがない場合の例外。"""

    def __init__(self):
        super().__init__(msg("metadata_no_title"))


@dataclass
class BookMetadata:
    """書籍のメタデータを保持するデータクラス。"""

    title: str  # タイトル（必須）
    creator: str = ""  # 著者（オプション）


# ファイル内のキーとフィールド名のマッピング
_FIELD_MAPPING: dict[str, str] = {
    "title": "title",
    "author": "creator",
    "creator": "creator",
}


def get_metadata_path_for_folder(source_folder: str | Path) -> Path:
    """
    章フォルダに対応するメタデータファイルパスを取得する。

    Parameters
    ----------
    source_folder : str | Path
        章ファイルが格納されたフォルダのパス（例：/path/to/bar）

    Returns
    -------
    Path
        メタデータファイルのパス（例：/path/to/bar_metadata.txt）
    """
    folder_path = Path(source_folder)
    return folder_path.parent / f"{folder_path.name}{METADATA_SUFFIX}"


def parse_metadata_file(metadata_path: Path) -> dict[str, str]:
    """
    メタデータファイルをパースして辞書を返す。

    Notes
    -----
    ファイルフォーマット::

        title: 〇〇
        author: 〇〇

    未知のキーと値が空の行は無視する。
    """
    result: dict[str, str] = {}

    with open(metadata_path, "r", encoding="utf-8-sig") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue

            # 「:」または「：」で分割（半角コロン優先）
            if ":" in line:
                key, _, value = line.partition(":")
            elif "：" in line:
                key, _, value = line.partition("：")
            else:
                continue

            key = key.strip().lower()
            value = value.strip()

            if value and key in _FIELD_MAPPING:
                result[_FIELD_MAPPING[key]] = value

    return result


def load_metadata_for_folder(source_folder: str | Path) -> BookMetadata:
    """
    章フォルダ用のメタデータを読み込む。

    Raises
    ------
    MetadataFileNotFoundError
        メタデータファイルが見つからない場合
    MetadataTitleMissingError
        タイトルが記載されていない場合
    """
    metadata_path = get_metadata_path_for_folder(source_folder)
    if not metadata_path.exists():
        raise MetadataFileNotFoundError(str(metadata_path))

    fields = parse_metadata_file(metadata_path)
    if "title" not in fields:
        raise MetadataTitleMissingError()

    return BookMetadata(title=fields["title"], creator=fields.get("creator", ""))
