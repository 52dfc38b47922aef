"""Markdown to plain text transformation."""

from .plaintext import convert, markdown_to_plaintext, split_fenced_blocks
from .rules import PROSE_RULES, Rule, collapse_blank_lines

__all__ = [
    "PROSE_RULES",
    "Rule",
    "collapse_blank_lines",
    "convert",
    "markdown_to_plaintext",
    "split_fenced_blocks",
]
