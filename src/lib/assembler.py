"""
Assembler for note token streams

Walks a TokenCursor and builds paragraphs, runs, hyperlinks and images in
the shared DocxDocument. The assembler is a small state machine: each
token kind has a handler which may look ahead (peek) and consume (pop)
the tokens that complete its construct.

    Code             monospace bold run
    Newline          new paragraph
    Heading  Text    heading paragraph + blank paragraph
    Bullet   Text    "- text" run
    ![[ Text ]]      centered anchored image, then a new paragraph
    [ Text ] (       hyperlink with the name as display run
    ( Text )         target of the current hyperlink (plain run if none)
    Text             plain run

Constructs whose lookahead does not match degrade to plain text or are
dropped; they never raise.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from docx.shared import Inches
from docx.text.paragraph import Paragraph

from ..models.tokens import Token, TokenKind
from .cursor import TokenCursor
from .document import DocxDocument, HyperLink, image_load, run_add
from .log import LOG
from .theme import Theme


class Assembler:
    """
    Token stream → document state machine

    State:
        current_paragraph: Paragraph receiving runs; always set while a
                           file is being assembled, replaced, never cleared
        current_hyperlink: Last hyperlink whose name was recognized. It is
                           only replaced by the next link, so a later "("
                           in the same file can still retarget it.

    Both are reset at the start of every file.
    """

    def __init__(
        self,
        document: DocxDocument,
        assets_dir: Union[str, Path],
        theme: Optional[Theme] = None,
    ) -> None:
        """
        Initialize assembler

        Args:
            document: Shared output document
            assets_dir: Base directory for ![[image]] links
            theme: Styling; built-in defaults if None
        """
        self.document = document
        self.assets_dir = str(assets_dir)
        self.theme = theme or Theme()

        self.current_paragraph: Optional[Paragraph] = None
        self.current_hyperlink: Optional[HyperLink] = None

        self.image_count = 0
        self.hyperlink_count = 0

        self.handlers: Dict[TokenKind, Callable[[Token, TokenCursor], None]] = {
            TokenKind.CODE: self.code_assemble,
            TokenKind.NEWLINE: self.newline_assemble,
            TokenKind.HEADING: self.heading_assemble,
            TokenKind.BULLET: self.bullet_assemble,
            TokenKind.IMAGE_LINK_START: self.image_assemble,
            TokenKind.LINK_NAME_START: self.linkName_assemble,
            TokenKind.LINK_TARGET_START: self.linkTarget_assemble,
            TokenKind.TEXT: self.text_assemble,
        }

    def assemble(self, title: str, tokens: List[Token]) -> None:
        """
        Assemble one file's tokens into the document

        Emits a title paragraph and a blank paragraph, runs every token
        through its handler, then closes the file's content with a
        next-page section break.

        Args:
            title: Page title (the note file's base name)
            tokens: The file's token sequence from the Lexer

        Raises:
            ImageLoadError: If a linked image is missing or unreadable
            DocumentModelError: If the document rejects a style
        """
        self.current_hyperlink = None
        title_paragraph = self.document.paragraph_add(self.theme.titleStyle_get())
        title_paragraph.add_run(title)
        self.current_paragraph = self.document.paragraph_add()

        cursor = TokenCursor(tokens)
        while cursor.hasNext():
            token = cursor.pop()
            if token is None:
                continue
            LOG(str(token), level=3)

            handler = self.handlers.get(token.kind)
            if handler:
                handler(token, cursor)

        self.document.sectionBreak_add()

    def paragraph_start(self, style: Optional[str] = None) -> Paragraph:
        self.current_paragraph = self.document.paragraph_add(style)
        return self.current_paragraph

    def code_assemble(self, token: Token, cursor: TokenCursor) -> None:
        run_add(
            self.current_paragraph,
            token.value,
            bold=self.theme.codeBold_get(),
            font=self.theme.codeFont_get(),
        )

    def newline_assemble(self, token: Token, cursor: TokenCursor) -> None:
        self.paragraph_start()

    def heading_assemble(self, token: Token, cursor: TokenCursor) -> None:
        """Heading paragraph with the following text in bold, then a blank paragraph"""
        if cursor.peek().kind is not TokenKind.TEXT:
            return
        text = cursor.pop()
        heading = self.paragraph_start(self.theme.headingStyle_get())
        run_add(heading, text.value, bold=True)
        self.paragraph_start()

    def bullet_assemble(self, token: Token, cursor: TokenCursor) -> None:
        if cursor.peek().kind is not TokenKind.TEXT:
            return
        text = cursor.pop()
        run_add(self.current_paragraph, f"- {text.value}")

    def image_assemble(self, token: Token, cursor: TokenCursor) -> None:
        """
        Embed ![[name]] from the assets directory

        The image is anchored in a new run of the current paragraph:
        centered on the column, positioned relative to the paragraph,
        fixed theme width with aspect-preserving height, text above and
        below only. Assembly continues in a new paragraph.

        Raises:
            ImageLoadError: If the file is missing or cannot be decoded
        """
        if cursor.peek().kind is not TokenKind.TEXT:
            return
        name = cursor.pop()
        image = image_load(f"{self.assets_dir}/{name.value}")
        LOG(f"Image {image.path}: {image.width_px}x{image.height_px}px", level=2)

        width = int(Inches(self.theme.imageWidth_get()))
        height = image.height_forWidth(width)

        run = self.current_paragraph.add_run()
        anchored = self.document.picture_anchor(run, image, width, height)
        anchored.horizontalAlign_set("center", relative_from="column")
        anchored.verticalOrigin_set("paragraph")
        anchored.wrap_set("topAndBottom")
        self.image_count += 1

        self.paragraph_start()
        if cursor.peek().kind is TokenKind.IMAGE_LINK_END:
            cursor.pop()

    def linkName_assemble(self, token: Token, cursor: TokenCursor) -> None:
        """
        Start a hyperlink for [name](, or keep "[" as text

        Only the name is consumed here; "](" is left for linkTarget_assemble.
        """
        is_link = (
            cursor.peek(0).kind is TokenKind.TEXT
            and cursor.peek(1).kind is TokenKind.LINK_NAME_END
            and cursor.peek(2).kind is TokenKind.LINK_TARGET_START
        )
        if not is_link:
            run_add(self.current_paragraph, token.value)
            return

        name = cursor.pop()
        link_color = self.theme.linkColor_get()
        hyperlink = self.document.hyperlink_add(self.current_paragraph)
        hyperlink.run_add(name.value, color=link_color, underline_color=link_color)
        self.current_hyperlink = hyperlink
        self.hyperlink_count += 1

    def linkTarget_assemble(self, token: Token, cursor: TokenCursor) -> None:
        """
        Set the current hyperlink's target from (target)

        Without a current hyperlink the target text becomes a plain run.
        """
        if cursor.peek().kind is not TokenKind.TEXT:
            return
        target = cursor.pop()

        if self.current_hyperlink is None:
            run_add(self.current_paragraph, target.value)
            return

        self.current_hyperlink.target_set(target.value)
        if cursor.peek().kind is TokenKind.LINK_TARGET_END:
            cursor.pop()

    def text_assemble(self, token: Token, cursor: TokenCursor) -> None:
        run_add(self.current_paragraph, token.value)
