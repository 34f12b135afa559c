"""
Token cursor

Stateful reader over a token sequence used by the Assembler.

Note the two end-of-stream conventions:
    peek() past the end returns the NO_TOKEN sentinel (kind EMPTY)
    pop()  past the end returns None
Callers check hasNext() before pop() and token.is_empty after peek().
"""

from typing import List, Optional

from ..models.tokens import Token, NO_TOKEN


class TokenCursor:
    """
    Forward-only cursor over a token list

    Attributes:
        tokens: Token sequence being read (never modified)
        position: Index of the next token to pop, 0..len(tokens)
    """

    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.position = 0

    def hasNext(self) -> bool:
        """True while at least one token remains to pop"""
        return self.position < len(self.tokens)

    def peek(self, offset: int = 0) -> Token:
        """
        Look at a token without consuming it

        Args:
            offset: 0 for the next token to pop, 1 for the one after, ...

        Returns:
            The token, or NO_TOKEN if the offset runs past the end
        """
        index = self.position + offset
        if offset < 0 or index >= len(self.tokens):
            return NO_TOKEN
        return self.tokens[index]

    def pop(self) -> Optional[Token]:
        """
        Consume the next token

        Returns:
            The token, or None when no tokens remain (position unchanged)
        """
        if not self.hasNext():
            return None
        token = self.tokens[self.position]
        self.position += 1
        return token

    def __len__(self) -> int:
        """Number of tokens not yet consumed"""
        return len(self.tokens) - self.position
