"""
EPUB生成処理用のカスタム例外クラス。

処理パイプラインの各段階で発生するエラーを明確に分類し、
適切なエラーハンドリングを可能にします。
"""


class EpubGenerationError(Exception):
    """EPUB生成処理の基底例外クラス。"""
    pass


class EpubIOError(EpubGenerationError, OSError):
    """入出力に起因するエラー。OSErrorとしても捕捉できる。"""
    pass


class ChapterSourceError(EpubIOError):
    """章ファイルのフォルダまたはファイルを読み込めない場合の例外。"""

    def __init__(self, message: str, source_path: str = ""):
        self.source_path = source_path
        super().__init__(message)


class EpubWriteError(EpubIOError):
    """EPUBファイルの書き出し（表紙画像の読み込みを含む）に失敗した場合の例外。"""

    def __init__(self, message: str, output_file: str = ""):
        self.output_file = output_file
        super().__init__(message)


class NoContentError(EpubGenerationError):
    """処理対象のコンテンツが存在しない場合のエラー。"""

    def __init__(self, message: str):
        super().__init__(message)
