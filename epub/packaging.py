"""
EPUBパッケージングモジュール。

EPUBのZIPアーカイブへのエントリ書き込みを提供します。
mimetypeを無圧縮で先頭に置き、それ以外は圧縮して書き込みます。
"""
import os
import shutil
import stat
import tempfile
import zipfile
from pathlib import Path

from core import logger
from core.config import EPUB_MIMETYPE, MIMETYPE_PATH, ZIP_DATE_TIME
from core.exceptions import EpubWriteError
from core.messages import msg


class EpubWriter:
    """
    EPUBアーカイブを書き出すコンテキストマネージャ。

    出力先と同じフォルダの一時ファイルに書き込み、
    with ブロックが正常終了したときだけ出力先に置き換える。
    例外で抜けた場合は一時ファイルを削除し、既存の出力ファイルには触れない。

    Examples
    --------
    ::

        with EpubWriter("book.epub") as w:
            w.write_mimetype()
            w.write_text("META-INF/container.xml", container_xml)
    """

    def __init__(self, output_path: str | Path):
        self.output_path = Path(output_path)
        self.entry_names: list[str] = []
        self._tmp_path: Path | None = None
        self._zip: zipfile.ZipFile | None = None

    def __enter__(self) -> "EpubWriter":
        try:
            tmp_handle = tempfile.NamedTemporaryFile(
                prefix=f"{self.output_path.stem}.",
                suffix=".tmp",
                dir=str(self.output_path.parent),
                delete=False,
            )
        except OSError as e:
            raise EpubWriteError(msg("epub_write_failed", file=self.output_path, error=e),
                                 str(self.output_path)) from e
        self._tmp_path = Path(tmp_handle.name)
        tmp_handle.close()
        try:
            self._zip = zipfile.ZipFile(self._tmp_path, "w")
        except OSError as e:
            self._tmp_path.unlink(missing_ok=True)
            raise EpubWriteError(msg("epub_write_failed", file=self.output_path, error=e),
                                 str(self.output_path)) from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self._zip.close()
            if exc_type is None:
                os.chmod(self._tmp_path, self._output_mode())
                self._tmp_path.replace(self.output_path)
        except OSError as e:
            if exc_type is None:
                raise EpubWriteError(msg("epub_write_failed", file=self.output_path, error=e),
                                     str(self.output_path)) from e
        finally:
            if self._tmp_path.exists():
                self._tmp_path.unlink(missing_ok=True)

    def _output_mode(self) -> int:
        """
        置き換え後の出力ファイルのパーミッションを返す。

        既存の出力ファイルがあればそのモードを引き継ぎ、
        なければ通常のファイル作成と同じく 0o666 から umask を除いた値とする。
        一時ファイルは 0o600 で作成されるため、置き換え前にこの値を設定する。
        """
        try:
            return stat.S_IMODE(self.output_path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _write_entry(self, name: str, data: bytes, compress_type: int) -> None:
        """固定日時のZipInfoで1エントリを書き込む。"""
        if self._zip is None:
            raise RuntimeError("EpubWriter is not open")
        info = zipfile.ZipInfo(name, date_time=ZIP_DATE_TIME)
        info.compress_type = compress_type
        try:
            self._zip.writestr(info, data)
        except OSError as e:
            raise EpubWriteError(msg("epub_write_failed", file=self.output_path, error=e),
                                 str(self.output_path)) from e
        self.entry_names.append(name)
        logger.debug(msg("epub_entry_written", name=name))

    def write_mimetype(self) -> None:
        """
        mimetypeエントリを書き込む。

        EPUB仕様により、アーカイブの最初のエントリで、
        無圧縮かつBOMなしのASCIIでなければならない。
        """
        if self.entry_names:
            raise RuntimeError("mimetype must be the first entry")
        self._write_entry(MIMETYPE_PATH, EPUB_MIMETYPE.encode("ascii"), zipfile.ZIP_STORED)

    def write_text(self, name: str, content: str) -> None:
        """テキストエントリをUTF-8（BOMなし）で圧縮して書き込む。"""
        self._write_entry(name, content.encode("utf-8"), zipfile.ZIP_DEFLATED)

    def write_file(self, name: str, source_path: str | Path) -> None:
        """
        ファイルの内容をそのまま圧縮して書き込む。

        Raises
        ------
        EpubWriteError
            元ファイルを読み込めない場合。
        """
        if self._zip is None:
            raise RuntimeError("EpubWriter is not open")
        info = zipfile.ZipInfo(name, date_time=ZIP_DATE_TIME)
        info.compress_type = zipfile.ZIP_DEFLATED
        try:
            with open(source_path, "rb") as src, self._zip.open(info, "w") as dst:
                shutil.copyfileobj(src, dst)
        except OSError as e:
            raise EpubWriteError(msg("epub_cover_unreadable", path=source_path, error=e),
                                 str(self.output_path)) from e
        self.entry_names.append(name)
        logger.debug(msg("epub_entry_written", name=name))
