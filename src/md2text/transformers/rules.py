"""Ordered rewrite rules used by the Markdown to plain text transformer.

Every rule is a compiled pattern plus a replacement. Rules run in the order
of ``PROSE_RULES``: wider emphasis delimiters before narrower ones, images
before links. Fenced code is never passed through these rules.
"""

import re
from dataclasses import dataclass

BULLET = "•"


@dataclass(frozen=True)
class Rule:
    """A named pattern rewrite."""

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _delimited(delimiter: str, *, intraword: bool = True) -> re.Pattern[str]:
    """Build a pattern for ``<delimiter>text<delimiter>`` spans on a single line.

    The enclosed text must be non-empty and must not start or end with
    whitespace or the delimiter character. It may contain shorter runs of the
    delimiter character but never a full delimiter, so a failed match attempt
    stops at the next delimiter run instead of scanning to the end of line.

    Args:
        delimiter: Repeated delimiter such as ``"**"`` or ``"~~"``
        intraword: If False, the span may not touch a word character on
            either side (used for underscores)

    Returns:
        Compiled pattern capturing the enclosed text in group 1
    """
    char = re.escape(delimiter[0])
    width = len(delimiter)
    if width == 1:
        inner = rf"[^{char}\n]"
    else:
        inner = rf"(?:[^{char}\n]|{char}{{1,{width - 1}}}(?!{char}))"

    marker = re.escape(delimiter)
    pattern = rf"{marker}(?![\s{char}])({inner}+?)(?<![\s{char}]){marker}"
    if not intraword:
        pattern = rf"(?<!\w){pattern}(?!\w)"
    return re.compile(pattern)


HEADING = Rule("heading", re.compile(r"^#{1,6}[ \t]+", re.MULTILINE), "")

EMPHASIS_RULES = (
    Rule("strong_emphasis_asterisk", _delimited("***"), r"\1"),
    Rule("strong_emphasis_underscore", _delimited("___", intraword=False), r"\1"),
    Rule("bold_asterisk", _delimited("**"), r"\1"),
    Rule("bold_underscore", _delimited("__", intraword=False), r"\1"),
    Rule("italic_asterisk", _delimited("*"), r"\1"),
    Rule("italic_underscore", _delimited("_", intraword=False), r"\1"),
)

STRIKETHROUGH = Rule("strikethrough", _delimited("~~"), r"\1")

INLINE_CODE = Rule("inline_code", re.compile(r"`([^`\n]+)`"), r"\1")

UNORDERED_LIST = Rule(
    "unordered_list",
    re.compile(r"^[ \t]*[-*+][ \t]+", re.MULTILINE),
    f"{BULLET} ",
)

ORDERED_LIST = Rule(
    "ordered_list",
    re.compile(r"^[ \t]*\d+\.[ \t]+", re.MULTILINE),
    f"{BULLET} ",
)

HORIZONTAL_RULE = Rule(
    "horizontal_rule",
    re.compile(r"^[ \t]*(?:-{3,}|\*{3,}|_{3,})[ \t]*$", re.MULTILINE),
    "",
)

# Labels stop at the next bracket and destinations at the next unbalanced
# parenthesis, so a failed attempt never rescans the rest of the line.
_LABEL = r"\[([^\[\]\n]*)\]"
_DESTINATION = r"\((?:[^()\n]|\([^()\n]*\))*\)"

# ![alt](url) shares its tail with [label](url); it must run first.
IMAGE = Rule("image", re.compile(rf"!{_LABEL}{_DESTINATION}"), r"\1")

LINK = Rule("link", re.compile(rf"{_LABEL}{_DESTINATION}"), r"\1")

# One level only: ">> x" keeps a single ">".
BLOCKQUOTE = Rule("blockquote", re.compile(r"^>(?:[ \t]+|$|(?=>))", re.MULTILINE), "")

PROSE_RULES: tuple[Rule, ...] = (
    HEADING,
    *EMPHASIS_RULES,
    STRIKETHROUGH,
    INLINE_CODE,
    UNORDERED_LIST,
    ORDERED_LIST,
    HORIZONTAL_RULE,
    IMAGE,
    LINK,
    BLOCKQUOTE,
)

BLANK_LINES = re.compile(r"\n{3,}")


def collapse_blank_lines(text: str) -> str:
    """Collapse three or more consecutive newlines into a single blank line."""
    return BLANK_LINES.sub("\n\n", text)
