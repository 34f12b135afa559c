"""
Compiler for a directory of notes to a single .docx

Finds the note files, lexes and assembles each one into a shared
DocxDocument, then saves it.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .assembler import Assembler
from .document import DocxDocument
from .errors import NoteReadError
from .lexer import Lexer
from .log import LOG
from .theme import Theme


# Characters XML 1.0 cannot hold; tab, line feed and carriage return are kept
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def notes_find(
    inputdir: Union[str, Path], exclude: Optional[Iterable[Union[str, Path]]] = None
) -> List[Path]:
    """
    Walk a directory for note files

    Every regular file below inputdir is a note. Directories and files are
    visited in sorted order so the output is reproducible. Entries that
    cannot be listed or stat'ed are logged and skipped.

    Args:
        inputdir: Root of the notes tree
        exclude: Files or directories never treated as notes, typically the
                 assets directory and the output document when they sit
                 inside the notes tree

    Returns:
        Note file paths in walk order
    """
    def walk_error(error: OSError) -> None:
        LOG(f"Error accessing path {error.filename!r}: {error}", level=1)

    excluded = {Path(p).resolve() for p in (exclude or [])}

    notes: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(inputdir, onerror=walk_error):
        dirnames[:] = sorted(
            d for d in dirnames if (Path(dirpath) / d).resolve() not in excluded
        )
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            try:
                path.stat()
            except OSError as e:
                LOG(f"Error accessing path {str(path)!r}: {e}", level=1)
                continue
            if path.resolve() in excluded:
                LOG(f"Skipping {path}", level=2)
                continue
            notes.append(path)
    return notes


class Compiler:
    """
    Compiles note files into one .docx document

    Responsibilities:
    - Read each note file
    - Lex it into tokens
    - Assemble the tokens into the shared document
    - Save the document once all files are done
    """

    def __init__(
        self,
        note_files: List[Path],
        assets_dir: Union[str, Path],
        output_file: Union[str, Path],
        theme: Optional[Theme] = None,
        verbosity: int = 1,
        encoding: str = "utf-8",
    ) -> None:
        """
        Initialize compiler

        Args:
            note_files: Notes to convert, in output order
            assets_dir: Base directory for ![[image]] links
            output_file: Path of the .docx to write
            theme: Document styling (defaults if None)
            verbosity: Output verbosity level (0-3)
            encoding: Text encoding of the note files
        """
        self.note_files = note_files
        self.assets_dir = Path(assets_dir)
        self.output_file = Path(output_file)
        self.theme = theme or Theme()
        self.verbosity = verbosity
        self.encoding = encoding

        self.document = DocxDocument()
        self.assembler = Assembler(self.document, self.assets_dir, self.theme)
        self.file_count = 0

    def compile(self) -> Dict[str, Any]:
        """
        Convert every note and save the document

        Returns:
            dict with conversion results and statistics

        Raises:
            NoteReadError: A note file cannot be read
            ImageLoadError: A linked image is missing or undecodable
            DocumentSaveError: The document cannot be written
        """
        LOG(f"Converting {len(self.note_files)} note files...", level=2)

        for path in self.note_files:
            self.file_compile(path)

        output_path = self.document.save(self.output_file)
        LOG(f"Wrote {output_path}", level=2)

        return {
            'status': True,
            'output_file': str(output_path),
            'file_count': self.file_count,
            'image_count': self.assembler.image_count,
            'hyperlink_count': self.assembler.hyperlink_count,
        }

    def note_read(self, path: Path) -> str:
        """
        Read a note as text

        Undecodable bytes become U+FFFD and control characters that cannot
        appear in a document are removed; only a failed read is fatal.

        Raises:
            NoteReadError: The file cannot be read or the encoding is unknown
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            raise NoteReadError(f"Cannot read {path}: {e}")
        try:
            text = data.decode(self.encoding, errors="replace")
        except LookupError as e:
            raise NoteReadError(f"Cannot decode {path}: {e}")
        return CONTROL_CHARS.sub("", text)

    def file_compile(self, path: Path) -> None:
        """Lex and assemble one note file into the document"""
        LOG(f"Processing file: {path}", level=1)

        source = self.note_read(path)
        tokens = Lexer(source, debug=(self.verbosity >= 3)).tokenize()
        LOG(f"Lexed {len(tokens)} tokens from {path.name}", level=2)

        self.assembler.assemble(path.name, tokens)
        self.file_count += 1
        LOG(f"File: {path}", level=2)
