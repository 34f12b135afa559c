"""
Models package for notedocx

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .tokens import Token, TokenKind, NO_TOKEN, LINE_BREAK
from .lexer import ScanState, MarkerMatch
from .document import ImageInfo

__all__ = [
    "ProgramState",
    "pipeline",
    "Token",
    "TokenKind",
    "NO_TOKEN",
    "LINE_BREAK",
    "ScanState",
    "MarkerMatch",
    "ImageInfo",
]
