"""
Lexer for the notes dialect

Turns raw note text into a flat, ordered list of Tokens.

The lexer scans each line one character at a time, accumulating characters
in a buffer. After every character the end of the buffer is tested against
the marker suffixes below (in priority order); on a match the text before
the marker is flushed as a Text token (Code inside an open code span), the
marker's own tokens are emitted and the buffer is cleared.

    -       Bullet            column 0, nothing open
    #       Heading           column 0, nothing open
    [       LinkNameStart     not part of "![" / "![["
    ](      LinkNameEnd + LinkTargetStart   "[" on top of the link stack
    )       LinkTargetEnd     "(" on top of the link stack
    `       opens/closes a code span (no token of its own)
    ![[     ImageLinkStart
    ]]      ImageLinkEnd

Every line ends with a Newline token, including the last one.

Example:
    >>> tokens = Lexer("[name](target)").tokenize()
    >>> [t.kind.value for t in tokens]
    ['linknamestart', 'text', 'linknameend', 'linktargetstart', 'text', 'linktargetend', 'newline']
"""

from typing import List, Optional

from ..models.tokens import Token, TokenKind, LINE_BREAK
from ..models.lexer import ScanState, MarkerMatch
from .log import LOG


BACKTICK = "`"


class Lexer:
    """
    Character-scanning tokenizer for note text

    Handles:
    - Line-start bullet and heading markers
    - Inline links [name](target), tracked on a line-scoped delimiter stack
    - Code spans `code`, tracked on a file-scoped delimiter stack
    - Image links ![[file.png]]
    """

    def __init__(self, source: str, debug: bool = False):
        """
        Initialize lexer with source text

        Args:
            source: Raw note text (one file's contents)
            debug: Log every scanned line (verbosity 3)

        Attributes:
            source: Text being tokenized
            tokens: Accumulated token sequence for the whole file
            state: Delimiter stacks carried across the per-line scans
        """
        self.source = source
        self.debug = debug
        self.tokens: List[Token] = []
        self.state = ScanState()

    def tokenize(self) -> List[Token]:
        """
        Tokenize the whole source

        Returns:
            Token list for the file; one Newline token per source line.
            Empty source yields a single Newline token.
        """
        self.tokens = []
        self.state = ScanState()

        for line_number, line in enumerate(self.lines_split(self.source), start=1):
            self.state.line_reset()
            line_tokens = self.line_scan(line, self.state)
            if self.debug:
                LOG(f"Line {line_number}: {len(line_tokens)} tokens", level=3)
            self.tokens.extend(line_tokens)

        return self.tokens

    @staticmethod
    def lines_split(source: str) -> List[str]:
        """
        Split source into lines

        A final line break does not start an extra (empty) line, and a
        trailing carriage return is removed from every line.
        """
        if source.endswith("\n"):
            source = source[:-1]
        return [line[:-1] if line.endswith("\r") else line for line in source.split("\n")]

    def line_scan(self, line: str, state: ScanState) -> List[Token]:
        """
        Tokenize one line

        Args:
            line: Line text without its line break
            state: Scan state; its link stack must already be reset for the line

        Returns:
            Tokens for the line, always ending in a Newline token
        """
        tokens: List[Token] = []
        current = ""
        strip_leading = False

        for column, character in enumerate(line):
            current += character

            match = self.marker_match(current, column, state)
            if match is None:
                continue

            text = current[:len(current) - match.marker_length]
            self.fragment_flush(tokens, text, state, strip_leading=strip_leading)
            tokens.extend(match.tokens)
            self.stack_update(match, state)

            strip_leading = match.line_start
            current = ""

        # End of line: a blank remainder is kept only after other tokens
        if current.strip() or tokens:
            self.fragment_flush(tokens, current, state, strip_leading=strip_leading)

        tokens.append(Token(TokenKind.NEWLINE, LINE_BREAK))
        return tokens

    def marker_match(self, current: str, column: int, state: ScanState) -> Optional[MarkerMatch]:
        """
        Test the end of the buffer against the marker suffixes

        Args:
            current: Accumulation buffer, last character just appended
            column: Column of the last character in the line
            state: Current delimiter state

        Returns:
            MarkerMatch for the highest-priority marker found, else None
        """
        if column == 0 and not state.any_open:
            if current == "-":
                return MarkerMatch(1, [Token(TokenKind.BULLET, "-")], line_start=True)
            if current == "#":
                return MarkerMatch(1, [Token(TokenKind.HEADING, "#")], line_start=True)

        if current.endswith("[") and not current.endswith("![") and not current.endswith("![["):
            return MarkerMatch(1, [Token(TokenKind.LINK_NAME_START, "[")], links_push="[")

        if current.endswith("](") and state.links.peek() == "[":
            return MarkerMatch(
                2,
                [Token(TokenKind.LINK_NAME_END, "]"), Token(TokenKind.LINK_TARGET_START, "(")],
                links_pop=True,
                links_push="(",
            )

        if current.endswith(")") and state.links.peek() == "(":
            return MarkerMatch(1, [Token(TokenKind.LINK_TARGET_END, ")")], links_pop=True)

        if current.endswith(BACKTICK):
            return MarkerMatch(1, code_toggle=True)

        if current.endswith("![["):
            return MarkerMatch(3, [Token(TokenKind.IMAGE_LINK_START, "![[")])

        if current.endswith("]]"):
            return MarkerMatch(2, [Token(TokenKind.IMAGE_LINK_END, "]]")])

        return None

    @staticmethod
    def fragment_flush(
        tokens: List[Token], text: str, state: ScanState, strip_leading: bool = False
    ) -> None:
        """
        Emit buffered text preceding a marker

        The fragment becomes a Code token while a code span is open, a Text
        token otherwise. Empty fragments are not emitted.

        Args:
            tokens: Line token list to append to
            text: Buffer content without the marker
            state: Delimiter state before the marker is applied
            strip_leading: Drop leading whitespace (separator after a
                           Bullet/Heading marker)
        """
        if strip_leading:
            text = text.lstrip()
        if not text:
            return
        kind = TokenKind.CODE if state.code_open else TokenKind.TEXT
        tokens.append(Token(kind, text))

    @staticmethod
    def stack_update(match: MarkerMatch, state: ScanState) -> None:
        """Apply a marker's push/pop operations to the delimiter stacks"""
        if match.links_pop:
            state.links.pop()
        if match.links_push:
            state.links.push(match.links_push)
        if match.code_toggle:
            if state.code_open:
                state.code.pop()
            else:
                state.code.push(BACKTICK)


def tokenize(text: str) -> List[Token]:
    """
    Tokenize note text

    Args:
        text: Raw contents of one note file

    Returns:
        Ordered token sequence for the file
    """
    return Lexer(text).tokenize()


def tokens_render(tokens: List[Token]) -> str:
    """
    Re-join a token sequence into note text

    Inverse of tokenize() up to whitespace the lexer does not keep: code
    values get their backticks back, Bullet/Heading markers are followed by
    a single space, and each Newline becomes a line break.

    Re-tokenizing the result gives back the same token sequence.

    Example:
        >>> tokens_render(tokenize("- see `x` and [docs](http://d)"))
        '- see `x` and [docs](http://d)\\n'
    """
    parts: List[str] = []
    for token in tokens:
        if token.kind is TokenKind.CODE:
            parts.append(f"{BACKTICK}{token.value}{BACKTICK}")
        elif token.kind is TokenKind.NEWLINE:
            parts.append("\n")
        elif token.kind in (TokenKind.BULLET, TokenKind.HEADING):
            parts.append(f"{token.value} ")
        else:
            parts.append(token.value)
    return "".join(parts)
