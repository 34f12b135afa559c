"""
notedocx - Plain-text notes to Word document converter

Turns a directory of notes (headings, bullets, links, inline code, images)
into one .docx, one page section per note.
"""

__version__ = "1.0.0"
__author__ = "Rudolph Pienaar"
__email__ = "rudolph.pienaar@gmail.com"

from .lib import Lexer, tokenize, Assembler, Compiler, LOG, state_connectToLogger

__all__ = ["Lexer", "tokenize", "Assembler", "Compiler", "LOG", "state_connectToLogger", "__version__"]
