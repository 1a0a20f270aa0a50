"""HTML escaping and the markdown subset used by dictionary decorators.

Translations are display text destined for HTML. Undecorated entries are
escaped and then rendered with a small inline markdown subset, so
translators can emphasize words without being able to inject markup:

    **x** => <strong>x</strong>
    *x*   => <em>x</em>
    __x__ => <b>x</b>
    _x_   => <i>x</i>
    ~~x~~ => <del>x</del>
    ~x~   => <span class="alt">x</span>

A backslash before *, _ or ~ produces the literal character. Block mode
adds paragraphs, ATX headings and bullet lists on top of the inline rules.

The renderers do not escape; call escape_html() first.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import html
import re

__all__ = ["block_markdown", "escape_html", "inline_markdown"]

# (pattern, replacement) pairs applied in order; "(?<!\\)X" is an unescaped X
_INLINE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(?<!\\)\*\*(.+?)(?<!\\)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"(?<!\\)\*(.+?)(?<!\\)\*"), r"<em>\1</em>"),
    (re.compile(r"(?<!\\)__(.+?)(?<!\\)__"), r"<b>\1</b>"),
    (re.compile(r"(?<!\\)_(.+?)(?<!\\)_"), r"<i>\1</i>"),
    (re.compile(r"(?<!\\)~~(.+?)(?<!\\)~~"), r"<del>\1</del>"),
    (re.compile(r"(?<!\\)~(.+?)(?<!\\)~"), r'<span class="alt">\1</span>'),
)
_UNESCAPE = re.compile(r"\\([*_~])")

_HEADING = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
_BULLET = re.compile(r"^[-*]\s+(.*)$")
_BLANK_LINES = re.compile(r"\n\s*\n")


def escape_html(text: str) -> str:
    """Replace &, <, > and double quotes with HTML character entities.

    Example:
        >>> escape_html('"Word" & <tag>')
        '&quot;Word&quot; &amp; &lt;tag&gt;'
    """
    return html.escape(str(text), quote=False).replace('"', "&quot;")


def inline_markdown(text: str) -> str:
    """Render the inline markdown subset. No block tags are produced.

    Example:
        >>> inline_markdown("**strong** and *em*")
        '<strong>strong</strong> and <em>em</em>'
    """
    for pattern, replacement in _INLINE_RULES:
        text = pattern.sub(replacement, text)
    return _UNESCAPE.sub(r"\1", text)


def _render_block(block: str) -> str:
    lines = block.strip("\n").split("\n")

    if len(lines) == 1 and (heading := _HEADING.match(lines[0])):
        level = len(heading.group(1))
        return f"<h{level}>{inline_markdown(heading.group(2))}</h{level}>"

    bullets = [_BULLET.match(line.strip()) for line in lines]
    if all(bullets):
        items = "".join(f"<li>{inline_markdown(m.group(1))}</li>" for m in bullets if m)
        return f"<ul>{items}</ul>"

    body = "<br/>".join(inline_markdown(line.strip()) for line in lines)
    return f"<p>{body}</p>"


def block_markdown(text: str) -> str:
    """Render blank-line separated blocks as paragraphs, headings or lists.

    Example:
        >>> block_markdown("# Title\\n\\nSome **bold** text")
        '<h1>Title</h1>\\n<p>Some <strong>bold</strong> text</p>'
    """
    blocks = [b for b in _BLANK_LINES.split(text.replace("\r\n", "\n")) if b.strip()]
    return "\n".join(_render_block(block) for block in blocks)
