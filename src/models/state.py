"""
Conversion state and the stage pipeline

ProgramState is the single value handed from one CLI stage to the next;
pipeline() threads it through the stages in order.
"""

import dataclasses
from argparse import Namespace
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar


PS = TypeVar("PS", bound="ProgramState")

Stage = Callable[["ProgramState"], "ProgramState"]


@dataclass
class ProgramState:
    """
    State bus for one notedocx run.

    Fields are filled in stage by stage:
        - command line: inputdir, assetsdir, verbosity, outputFile, themeFile
        - env_check: notesInputdir, assetsInputdir, outputPath, envOK
        - notes_collect: noteFiles
        - docx_compile: compileResult
        - results_report: reads only

    Attributes:
        inputdir: Notes directory as given (walked recursively)
        assetsdir: Directory ![[image]] names are resolved against
        verbosity: 1 progress, 2 details, 3 token trace
        outputFile: Output document from the command line, if given
        themeFile: YAML theme from the command line, if given
        envOK: Both directories exist
        notesInputdir: Checked notes directory
        assetsInputdir: Checked assets directory
        outputPath: Where the .docx is written
        noteFiles: Notes in conversion order
        compileResult: Counts and output path from the Compiler
    """

    # Command line
    inputdir: Optional[Path] = field(default=None)
    assetsdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    outputFile: Optional[str] = field(default=None)
    themeFile: Optional[str] = field(default=None)

    # Filled by the stages
    envOK: bool = field(default=False)
    notesInputdir: Path = field(default=Path("."))
    assetsInputdir: Path = field(default=Path("."))
    outputPath: Path = field(default=Path("output.docx"))
    noteFiles: List[Path] = field(default_factory=list)
    compileResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(cls: Type[PS], options: Namespace) -> PS:
        """
        Build the initial state from parsed arguments.

        Namespace entries that are not ProgramState fields are ignored.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in vars(options).items() if k in known})

    def copy(self: PS) -> PS:
        """Shallow copy; stages modify the copy, never their input"""
        return dataclasses.replace(self)


def pipeline(initial_state: ProgramState, *stages: Stage) -> ProgramState:
    """
    Run stages left to right, each receiving the previous stage's state.

        pipeline(state, env_check, notes_collect, docx_compile, results_report)

    is results_report(docx_compile(notes_collect(env_check(state)))).
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
