"""Markdown to plain text transformer."""

import re
from dataclasses import dataclass

from .rules import PROSE_RULES, Rule, collapse_blank_lines

FENCE_OPEN = re.compile(r"^```[^`]*$")
FENCE_CLOSE = re.compile(r"^```[ \t]*$")


@dataclass(frozen=True)
class Segment:
    """A run of consecutive lines, either prose or fenced code interior."""

    lines: tuple[str, ...]
    fenced: bool = False


def split_fenced_blocks(text: str) -> list[Segment]:
    """
    Split text into prose and fenced code segments.

    A fence opens on a line starting with three backticks (an info string may
    follow) and closes on the next line made of three backticks. Delimiter
    lines are dropped. An opening fence that is never closed is kept as prose.

    Args:
        text: Newline-normalized document text

    Returns:
        Segments in document order
    """
    segments: list[Segment] = []
    prose: list[str] = []
    lines = text.split("\n")
    i = 0

    while i < len(lines):
        if FENCE_OPEN.match(lines[i]):
            close = next(
                (j for j in range(i + 1, len(lines)) if FENCE_CLOSE.match(lines[j])),
                None,
            )
            if close is None:
                # Unclosed fence: the rest of the document is prose
                prose.extend(lines[i:])
                break
            if prose:
                segments.append(Segment(tuple(prose)))
                prose = []
            segments.append(Segment(tuple(lines[i + 1 : close]), fenced=True))
            i = close + 1
            continue
        prose.append(lines[i])
        i += 1

    if prose:
        segments.append(Segment(tuple(prose)))
    return segments


def apply_rules(text: str, rules: tuple[Rule, ...] = PROSE_RULES) -> str:
    """Apply rewrite rules to prose text in order."""
    for rule in rules:
        text = rule.apply(text)
    return text


def markdown_to_plaintext(markdown: str | None) -> str:
    """
    Convert Markdown to plain text.

    Headings, emphasis, strikethrough, inline code, links and images are
    reduced to their visible text, list markers become bullet glyphs,
    blockquote markers and horizontal rules are removed, and fenced code is
    emitted verbatim without its delimiter lines. Runs of blank lines outside
    fenced code are collapsed last. Unrecognized or unbalanced markup is left
    as-is; this function never raises.

    Args:
        markdown: Markdown source, may be empty or None

    Returns:
        Plain text string
    """
    if not markdown:
        return ""

    text = markdown.replace("\r\n", "\n").replace("\r", "\n")

    pieces: list[tuple[str, bool]] = []
    for segment in split_fenced_blocks(text):
        if not segment.lines:
            continue
        block = "\n".join(segment.lines)
        if segment.fenced:
            pieces.append((block, True))
        elif pieces and not pieces[-1][1]:
            # An empty fence was dropped between two prose runs
            pieces[-1] = (pieces[-1][0] + "\n" + apply_rules(block), False)
        else:
            pieces.append((apply_rules(block), False))

    output = []
    for index, (block, fenced) in enumerate(pieces):
        if not fenced:
            block = _collapse_prose(
                block, after_fence=index > 0, before_fence=index < len(pieces) - 1
            )
        output.append(block)
    return "\n".join(output)


def _collapse_prose(block: str, after_fence: bool, before_fence: bool) -> str:
    """
    Collapse blank-line runs in a prose block, including runs that continue
    across the newline joining it to a neighbouring fenced block.

    Fenced interiors are never shortened; only the prose side of a join is.
    """
    block = collapse_blank_lines(block)
    body = block.strip("\n")
    if not body:
        return "\n" * min(len(block), 2 - after_fence - before_fence)

    if after_fence:
        leading = len(block) - len(block.lstrip("\n"))
        block = "\n" * min(leading, 1) + block.lstrip("\n")
    if before_fence:
        trailing = len(block) - len(block.rstrip("\n"))
        block = block.rstrip("\n") + "\n" * min(trailing, 1)
    return block


convert = markdown_to_plaintext
