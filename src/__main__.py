#!/usr/bin/env python3
"""
notedocx - Plain-text notes to Word document converter

Converts a directory of plain-text notes into a single .docx document.
Every note becomes its own page section: a title with the note's file
name, followed by its content.

Note syntax:
    # Heading             heading line
    - item                bulleted line
    `code`                inline code (monospace, bold)
    [name](target)        hyperlink
    ![[picture.png]]      image from the assets directory, centered

Usage:
    notedocx inputdir/ assetsdir/

    The document is written to output.docx in the working directory.

Examples:
    # Basic conversion
    notedocx notes/ notes/assets/

    # Custom output name and theme
    notedocx notes/ assets/ --outputFile journal.docx --themeFile print.yaml

    # Verbose output
    notedocx notes/ assets/ -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import Compiler, notes_find, __version__, LOG, state_connectToLogger
from .lib.errors import NotedocxError
from .lib.theme import Theme, ThemeError
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
              _          _
  _ __   ___ | |_ ___  __| | ___   _____  __
 | '_ \ / _ \| __/ _ \/ _` |/ _ \ / __\ \/ /
 | | | | (_) | ||  __/ (_| | (_) | (__ >  <
 |_| |_|\___/ \__\___|\__,_|\___/ \___/_/\_\

  Plain-text notes to Word documents
"""

# Define CLI arguments
parser = ArgumentParser(
    description="notedocx - convert a directory of plain-text notes to one .docx document",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument("inputdir", type=Path, help="Directory containing the note files")

parser.add_argument("assetsdir", type=Path, help="Base directory for ![[image]] links")

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help=f"Output document (default: $NOTEDOCX_OUTPUT_FILE or {appsettings.output_file})",
)

parser.add_argument(
    "--themeFile",
    default=None,
    type=str,
    help="YAML theme with fonts, colours, styles and image width (default: $NOTEDOCX_THEME_FILE)",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Check the input directories and settle the output path.

    Args:
        inputstate: State built from the command line

    Returns:
        ProgramState with added fields:
            - notesInputdir: Resolved notes directory
            - assetsInputdir: Resolved assets directory
            - outputPath: Output document path
            - envOK: True if environment is valid

    Exits:
        1 if the notes or assets directory is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not Path(state.inputdir).is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.notesInputdir = Path(state.inputdir)
    LOG(f"Notes directory: {state.notesInputdir}", level=2)

    if state.assetsdir is None or not Path(state.assetsdir).is_dir():
        print(f"Error: Assets directory not found: {state.assetsdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.assetsInputdir = Path(state.assetsdir)
    LOG(f"Assets directory: {state.assetsInputdir}", level=2)

    state.outputPath = Path(state.outputFile or appsettings.output_file)
    LOG(f"Output document: {state.outputPath}", level=2)

    state.envOK = True
    return state


def notes_collect(inputstate: ProgramState) -> ProgramState:
    """
    Walk the notes directory for note files.

    Unreadable directory entries are logged and skipped. The assets
    directory and the output document are never notes, even when they
    sit inside the notes directory.

    Args:
        inputstate: Program state with notesInputdir set

    Returns:
        ProgramState with added field:
            - noteFiles: List[Path] of notes in walk order
    """

    state = inputstate.copy()

    LOG("Collecting note files...", level=1)
    state.noteFiles = notes_find(
        state.notesInputdir, exclude=[state.assetsInputdir, state.outputPath]
    )
    LOG(f"Found {len(state.noteFiles)} note files", level=2)
    return state


def docx_compile(inputstate: ProgramState) -> ProgramState:
    """
    Convert the collected notes into the output document.

    Any fatal error (unreadable note, missing or undecodable image,
    failed save) aborts the whole run; nothing is written.

    Args:
        inputstate: Program state with noteFiles and resolved paths

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - status: bool (conversion success)
                - output_file: str (path to the written .docx)
                - file_count: int (number of notes converted)
                - image_count: int
                - hyperlink_count: int

    Exits:
        1 if the theme cannot be loaded or conversion fails
    """

    state = inputstate.copy()

    LOG("Converting notes to docx...", level=1)

    try:
        theme = Theme(state.themeFile or appsettings.theme_file)
        LOG(f"Loaded theme: {theme.name}", level=2)
    except ThemeError as e:
        print(f"Theme error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        compiler = Compiler(
            note_files=state.noteFiles,
            assets_dir=state.assetsInputdir,
            output_file=state.outputPath,
            theme=theme,
            verbosity=state.verbosity,
            encoding=appsettings.file_encoding,
        )
        state.compileResult = compiler.compile()
        LOG(f"Conversion complete: {state.compileResult['file_count']} files", level=2)
    except NotedocxError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results.

    Args:
        inputstate: Program state with compileResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if compileResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Conversion failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("✓ Conversion successful!", level=1)
        LOG(f"  Output: {state.compileResult['output_file']}", level=1)
        LOG(f"  Notes: {state.compileResult['file_count']}", level=1)
        LOG(f"  Images: {state.compileResult['image_count']}", level=2)
        LOG(f"  Links: {state.compileResult['hyperlink_count']}", level=2)
    return state


def main(argv: Optional[List[str]] = None) -> ProgramState:
    """
    Main entry point - convert a notes directory to a .docx document.

    Orchestrates the full conversion pipeline:
        1. env_check: Check directories, settle the output path
        2. notes_collect: Walk the notes directory
        3. docx_compile: Lex, assemble and save every note
        4. results_report: Print counts and the output path

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Final ProgramState
    """
    options = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(options=options)

    # LOG() verbosity follows this state
    state_connectToLogger(state)

    return pipeline(state, env_check, notes_collect, docx_compile, results_report)


if __name__ == "__main__":
    main()
