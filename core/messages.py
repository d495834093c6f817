"""
UIメッセージ国際化モジュール。

OSのロケールに基づいて日本語/英語のUIメッセージを自動切替する。
"""
import locale
import os

MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        # ツールタイトル
        "tool_title": "md2epub - Markdown to EPUB2 Tool",

        # 処理ログ
        "processing_start": "処理開始: {time}",
        "processing_end": "処理終了: {time}",
        "elapsed_time": "所要時間: {time}",
        "output_file": "生成ファイル: {path}",
        "processing_aborted": "処理を中断しました。",

        # エラー・バリデーション
        "folder_not_found": "フォルダが見つかりません: {path}",
        "folder_unreadable": "フォルダを読み込めません: {path} ({error})",
        "chapter_unreadable": "章ファイルを読み込めません: {path} ({error})",
        "no_chapters_in_folder": "{folder} に章として読み込める{ext}ファイルがありません。",
        "title_missing": "タイトルが指定されていません。--title か書誌情報ファイルで指定してください。",

        # メタデータエラー
        "metadata_not_found": "エラー：書誌情報がありません\n期待されるファイル: {path}\n処理を中断しました。",
        "metadata_no_title": "エラー：書誌情報にタイトルがありません\n処理を中断しました。",
        "metadata_loaded": "書誌情報を読み込みました: {path}",

        # ロガープレフィックス
        "log_warning": "警告: {message}",
        "log_success": "成功: {message}",

        # 章の読み込みログ
        "chapter_loaded": "章を読み込みました: {name} → {title}",
        "chapter_skipped_empty": "空のファイルをスキップしました: {name}",
        "chapter_count": "{count} 個の章を読み込みました。",

        # EPUBビルダーログ
        "epub_start": "EPUB2ファイルを生成します。",
        "epub_cover_missing": "表紙画像が見つからないため、表紙なしで生成します: {path}",
        "epub_cover_added": "表紙画像を追加しました: {path}",
        "epub_entry_written": "エントリを書き込みました: {name}",
        "epub_saved": "EPUBファイルを生成しました: {file}",
        "epub_write_failed": "EPUBファイルを書き出せません: {file} ({error})",
        "epub_cover_unreadable": "表紙画像を読み込めません: {path} ({error})",
    },
    "en": {
        # Tool title
        "tool_title": "md2epub - Markdown to EPUB2 Tool",

        # Processing log
        "processing_start": "Processing started: {time}",
        "processing_end": "Processing finished: {time}",
        "elapsed_time": "Elapsed time: {time}",
        "output_file": "Output file: {path}",
        "processing_aborted": "Processing aborted.",

        # Errors and validation
        "folder_not_found": "Folder not found: {path}",
        "folder_unreadable": "Cannot read folder: {path} ({error})",
        "chapter_unreadable": "Cannot read chapter file: {path} ({error})",
        "no_chapters_in_folder": "No {ext} files with chapter content found in {folder}.",
        "title_missing": "No title given. Use --title or a metadata file.",

        # Metadata errors
        "metadata_not_found": "Error: metadata file not found\nExpected file: {path}\nProcessing aborted.",
        "metadata_no_title": "Error: metadata has no title\nProcessing aborted.",
        "metadata_loaded": "Loaded metadata: {path}",

        # Logger prefixes
        "log_warning": "Warning: {message}",
        "log_success": "Success: {message}",

        # Chapter loading
        "chapter_loaded": "Loaded chapter: {name} -> {title}",
        "chapter_skipped_empty": "Skipped empty file: {name}",
        "chapter_count": "Loaded {count} chapters.",

        # EPUB builder
        "epub_start": "Generating EPUB2 file.",
        "epub_cover_missing": "Cover image not found, building without a cover: {path}",
        "epub_cover_added": "Added cover image: {path}",
        "epub_entry_written": "Wrote entry: {name}",
        "epub_saved": "EPUB file generated: {file}",
        "epub_write_failed": "Cannot write EPUB file: {file} ({error})",
        "epub_cover_unreadable": "Cannot read cover image: {path} ({error})",
    },
}

# OS言語判定
def _detect_ui_language() -> str:
    """OSのロケールから UI 言語を判定する。"""
    # 環境変数をチェック（LC_ALL, LC_MESSAGES, LANG）
    # C / C.UTF-8 / POSIX はデフォルト値のため言語指定なしとして除外
    for env_var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(env_var, "")
        if value and not value.startswith("C") and value != "POSIX":
            return "ja" if value.startswith("ja") else "en"
    # フォールバック: locale.getlocale()
    # Windows では "Japanese_Japan" のように返るため、大文字小文字を無視して判定
    try:
        loc = locale.getlocale()[0] or ""
    except ValueError:
        loc = ""
    return "ja" if loc.lower().startswith("ja") else "en"

_ui_lang = _detect_ui_language()


def msg(key: str, **kwargs) -> str:
    """
    指定キーのUIメッセージを現在のロケールに応じて返す。

    Parameters
    ----------
    key : str
        メッセージキー
    **kwargs
        メッセージ内のプレースホルダーに渡す値

    Returns
    -------
    str
        ロケールに応じたメッセージ文字列
    """
    template = MESSAGES[_ui_lang].get(key, key)
    if kwargs:
        return template.format(**kwargs)
    return template
