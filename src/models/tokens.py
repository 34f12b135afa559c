"""
Token models for the notes lexer

Defines the token kinds produced by the Lexer and the immutable Token value
consumed by the TokenCursor and Assembler.
"""

from enum import Enum
from dataclasses import dataclass


class TokenKind(Enum):
    """
    Kinds of tokens emitted by the Lexer

    The values are stable and appear in debug output.
    """
    NEWLINE = "newline"
    BULLET = "bullet"
    HEADING = "heading"
    IMAGE_LINK_START = "imagelinkstart"    # ![[
    IMAGE_LINK_END = "imagelinkend"        # ]]
    LINK_NAME_START = "linknamestart"      # [
    LINK_NAME_END = "linknameend"          # ]
    LINK_TARGET_START = "linktargetstart"  # (
    LINK_TARGET_END = "linktargetend"      # )
    CODE = "code"
    TEXT = "text"

    # Only carried by the cursor's end-of-stream sentinel, never lexed
    EMPTY = ""


# Value of every Newline token (the line break itself is not captured)
LINE_BREAK = ""


@dataclass(frozen=True)
class Token:
    """
    A classified fragment of note text

    Attributes:
        kind: What the fragment is (TokenKind)
        value: Literal text captured for the token, e.g. a word run,
               a marker like "-" or "![[", or LINE_BREAK for newlines

    Example:
        The line "- item" lexes to:
        [Token(BULLET, "-"), Token(TEXT, "item"), Token(NEWLINE, "")]
    """
    kind: TokenKind
    value: str = ""

    @property
    def is_empty(self) -> bool:
        """True for the end-of-stream sentinel returned by TokenCursor.peek()"""
        return self.kind is TokenKind.EMPTY

    def __str__(self) -> str:
        return f"[Type: {self.kind.value}, Value: {self.value}]"


# Sentinel returned when peeking past the end of a token sequence
NO_TOKEN = Token(TokenKind.EMPTY, "")
