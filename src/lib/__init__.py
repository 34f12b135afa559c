"""
notedocx - Plain-text notes to Word document converter

Lexes notes written in a small markdown-like dialect and assembles them
into a single .docx document.
"""

__version__ = "1.0.0"
__author__ = "Rudolph Pienaar"
__email__ = "rudolph.pienaar@gmail.com"

from .lexer import Lexer, tokenize
from .cursor import TokenCursor
from .assembler import Assembler
from .compiler import Compiler, notes_find
from .log import LOG, state_connectToLogger

__all__ = [
    "Lexer",
    "tokenize",
    "TokenCursor",
    "Assembler",
    "Compiler",
    "notes_find",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
