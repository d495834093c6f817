"""
XHTML変換モジュール。

章本文の簡易Markdownを、EPUBリーダー向けのXHTMLブロック要素に変換します。
"""
from html import escape


# 見出し記法と要素名の対応（長い記号から順に判定する）
HEADING_PREFIXES: tuple[tuple[str, str], ...] = (
    ("### ", "h3"),
    ("## ", "h2"),
    ("# ", "h1"),
)


def escape_xml_text(text: str) -> str:
    """XML本文用に「&」「<」「>」をエスケープする。"""
    return escape(text, quote=False)


def convert_line(line: str) -> str:
    """
    1行を1つのブロック要素に変換する。

    Examples
    --------
    >>> convert_line("### Sub")
    '<h3>Sub</h3>'
    >>> convert_line("   ")
    '<p></p>'
    >>> convert_line("a < b")
    '<p>a &lt; b</p>'
    """
    for prefix, tag in HEADING_PREFIXES:
        if line.startswith(prefix):
            return f"<{tag}>{escape_xml_text(line[len(prefix):])}</{tag}>"
    if not line.strip():
        return "<p></p>"
    return f"<p>{escape_xml_text(line)}</p>"


def markdown_to_xhtml(markdown: str) -> str:
    """
    章本文をXHTMLのブロック要素列に変換する。

    入力の1行につき1要素を出力し、要素ごとに改行で区切る。
    空行は空の段落として残し、原文の行間を保つ。

    Parameters
    ----------
    markdown : str
        章本文（タイトル行を除いたMarkdown）。

    Returns
    -------
    str
        h1/h2/h3/p 要素を改行で連結したXHTML断片。
    """
    return "\n".join(convert_line(line.rstrip("\r")) for line in markdown.split("\n"))
