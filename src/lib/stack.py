"""
Delimiter stack for the notes lexer

Tracks currently-open inline delimiters ("[", "(", "`") so the Lexer knows
whether buffered text is code or plain text, and whether a closing marker
such as ")" is allowed to close anything.
"""

from typing import List


class DelimiterStack:
    """
    Last-in-first-out stack of single-character delimiters

    Example:
        >>> stack = DelimiterStack()
        >>> stack.push("[")
        >>> stack.peek()
        '['
        >>> stack.pop()
        '['
        >>> stack.isEmpty()
        True
    """

    def __init__(self) -> None:
        self.items: List[str] = []

    def push(self, delim: str) -> None:
        self.items.append(delim)

    def pop(self) -> str:
        """
        Remove and return the top delimiter

        Raises:
            IndexError: If the stack is empty. The Lexer only pops after
                        checking the top with peek(), so this is a bug.
        """
        if not self.items:
            raise IndexError("pop from empty delimiter stack")
        return self.items.pop()

    def peek(self, depth: int = 0) -> str:
        """
        Look at a delimiter without removing it

        Args:
            depth: 0 for the top of the stack, 1 for the one below, ...

        Returns:
            The delimiter, or "" if the stack is not that deep
        """
        if depth < 0 or depth >= len(self.items):
            return ""
        return self.items[-1 - depth]

    def isEmpty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"DelimiterStack({self.items!r})"
