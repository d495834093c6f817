"""
ロギングユーティリティモジュール。

進捗・成功メッセージは標準出力へ、警告とエラーは標準エラー出力へ分けて出す。
EPUBをパイプでつなぐ場合でも、失敗の通知が標準出力に混ざらないようにする。
"""
import io
import logging
import sys
from enum import IntEnum

from core.messages import msg

LOGGER_NAME = "md2epub"


class LogLevel(IntEnum):
    """ログレベル定義。"""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class _ConsoleHandler(logging.StreamHandler):
    """
    出力のたびに sys.stdout / sys.stderr を引き直すハンドラ。

    モジュール読み込み後に差し替えられたストリーム（テストのキャプチャ等）にも書き込む。
    """

    def __init__(self, stream_name: str):
        super().__init__()
        self.stream_name = stream_name

    @property
    def stream(self):
        return getattr(sys, self.stream_name)

    @stream.setter
    def stream(self, value):
        # StreamHandler.__init__ が代入するため受け流す
        pass


class _MaxLevelFilter(logging.Filter):
    """指定レベル未満のレコードだけを通すフィルタ。"""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


# Windows cp932 環境でのUnicodeEncodeError対策
for _name in ("stdout", "stderr"):
    _stream = getattr(sys, _name)
    if _stream.encoding and _stream.encoding.lower() != 'utf-8' and hasattr(_stream, "buffer"):
        setattr(sys, _name, io.TextIOWrapper(_stream.buffer, encoding='utf-8', errors='replace'))

# アプリケーション用のロガーを作成
_logger = logging.getLogger(LOGGER_NAME)
_formatter = logging.Formatter("%(message)s")

_stdout_handler = _ConsoleHandler("stdout")
_stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))
_stdout_handler.setFormatter(_formatter)

_stderr_handler = _ConsoleHandler("stderr")
_stderr_handler.setLevel(logging.WARNING)
_stderr_handler.setFormatter(_formatter)

_logger.addHandler(_stdout_handler)
_logger.addHandler(_stderr_handler)
_logger.setLevel(logging.INFO)


def set_log_level(level: LogLevel) -> None:
    """ログレベルを設定する。"""
    _logger.setLevel(level)


def set_verbose(verbose: bool) -> None:
    """詳細表示の有無に応じて DEBUG / INFO を切り替える。"""
    set_log_level(LogLevel.DEBUG if verbose else LogLevel.INFO)


def debug(message: str) -> None:
    _logger.debug(message)


def info(message: str) -> None:
    _logger.info(message)


def warning(message: str) -> None:
    """警告メッセージを標準エラー出力へ出す。"""
    _logger.warning(msg("log_warning", message=message))


def error(message: str) -> None:
    """エラーメッセージを標準エラー出力へ出す。"""
    _logger.error(f"❌ {message}")


def success(message: str) -> None:
    _logger.info(f"✅ {msg('log_success', message=message)}")


def section(title: str) -> None:
    """セクション見出しを出力する。"""
    _logger.info("-" * 30)
    _logger.info(f"★{title}")


def separator(char: str = "=", length: int = 60) -> None:
    _logger.info(char * length)
