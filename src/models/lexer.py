"""
Lexer-specific data models

Scan state carried through the Lexer's per-line scan, and the result of
matching a marker at the end of the accumulation buffer.
"""

from dataclasses import dataclass, field
from typing import List

from .tokens import Token
from ..lib.stack import DelimiterStack


@dataclass
class ScanState:
    """
    Delimiter state for one file's scan

    The bracket/paren stack is line-scoped and replaced by line_reset() at the
    start of every line; the backtick stack is file-scoped, so a code span
    left open at the end of a line is still open on the next one.

    Attributes:
        links: Open "[" / "(" delimiters on the current line
        code: Open backtick delimiter, if any
    """
    links: DelimiterStack = field(default_factory=DelimiterStack)
    code: DelimiterStack = field(default_factory=DelimiterStack)

    def line_reset(self) -> None:
        """Abandon any unmatched link brackets from the previous line"""
        self.links = DelimiterStack()

    @property
    def code_open(self) -> bool:
        return not self.code.isEmpty()

    @property
    def any_open(self) -> bool:
        return not self.links.isEmpty() or self.code_open


@dataclass
class MarkerMatch:
    """
    A marker found at the end of the accumulation buffer

    Stack updates are applied after the preceding text has been flushed, so
    a closing backtick still flushes its span as code.

    Attributes:
        marker_length: Number of trailing buffer characters that form the marker
        tokens: Marker tokens to emit after the preceding text is flushed
        links_pop: Pop the bracket/paren stack
        links_push: Delimiter to push on the bracket/paren stack ("" for none)
        code_toggle: Open the code span if closed, close it if open
        line_start: Marker is a line-start Bullet/Heading; the next fragment
                    loses its leading whitespace

    Example:
        Buffer "see ](" with "[" open:
        MarkerMatch(marker_length=2,
                    tokens=[Token(LINK_NAME_END, "]"), Token(LINK_TARGET_START, "(")],
                    links_pop=True, links_push="(")
    """
    marker_length: int
    tokens: List[Token] = field(default_factory=list)
    links_pop: bool = False
    links_push: str = ""
    code_toggle: bool = False
    line_start: bool = False
