"""
Document model for notedocx

Thin adapter over python-docx exposing the operations the Assembler needs:
paragraphs with styles, formatted runs, hyperlinks, anchored (floating)
images and next-page section breaks. Images are measured with Pillow.

python-docx has no public API for hyperlinks or floating images, so both
are built from WordprocessingML elements the same way python-docx builds
its own inline pictures.
"""

from pathlib import Path
from typing import List, Optional, Union

import docx
from docx.enum.section import WD_SECTION
from docx.enum.text import WD_UNDERLINE
from docx.image.exceptions import UnrecognizedImageError
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement, parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.shared import RGBColor
from docx.text.paragraph import Paragraph
from docx.text.run import Run
from PIL import Image, UnidentifiedImageError

from ..models.document import ImageInfo
from .errors import DocumentModelError, DocumentSaveError, ImageLoadError


# Floating picture frame; extent, docPr and graphic are moved in from the
# inline picture python-docx generates
ANCHOR_XML = (
    '<wp:anchor %s distT="0" distB="0" distL="0" distR="0" simplePos="0" '
    'relativeHeight="0" behindDoc="0" locked="0" layoutInCell="1" allowOverlap="1">'
    '<wp:simplePos x="0" y="0"/>'
    '<wp:positionH relativeFrom="column"><wp:align>center</wp:align></wp:positionH>'
    '<wp:positionV relativeFrom="paragraph"><wp:posOffset>0</wp:posOffset></wp:positionV>'
    '</wp:anchor>' % nsdecls("wp")
)

WRAP_MODES = {
    "none": "wp:wrapNone",
    "square": "wp:wrapSquare",
    "topAndBottom": "wp:wrapTopAndBottom",
}


def image_load(path: Union[str, Path]) -> ImageInfo:
    """
    Open an image and read its pixel size

    Args:
        path: Image file path

    Returns:
        ImageInfo with the resolved path and pixel dimensions

    Raises:
        ImageLoadError: If the file is missing or is not a decodable image
    """
    image_path = Path(path)
    try:
        with Image.open(image_path) as img:
            width_px, height_px = img.size
    except FileNotFoundError:
        raise ImageLoadError(f"Image not found: {image_path}")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Cannot decode image {image_path}: {e}")

    if width_px <= 0 or height_px <= 0:
        raise ImageLoadError(f"Image has no size: {image_path}")

    return ImageInfo(path=image_path, width_px=width_px, height_px=height_px)


def run_format(
    run: Run,
    bold: bool = False,
    font: Optional[str] = None,
    color: Optional[str] = None,
    underline_color: Optional[str] = None,
) -> Run:
    """
    Apply character formatting to a run

    Args:
        run: Run to format
        bold: Bold weight
        font: Font family name (e.g. "Courier New")
        color: Text colour, 6-digit hex RGB
        underline_color: Single underline in this hex RGB colour

    Returns:
        The same run
    """
    if bold:
        run.bold = True
    if font:
        run.font.name = font
    if color:
        run.font.color.rgb = RGBColor.from_string(color)
    if underline_color:
        run.font.underline = WD_UNDERLINE.SINGLE
        run._r.rPr.u.set(qn("w:color"), underline_color)
    return run


def run_add(paragraph: Paragraph, text: str = "", **formatting) -> Run:
    """Append a run with text to a paragraph; formatting as for run_format()"""
    run = paragraph.add_run(text)
    return run_format(run, **formatting)


class HyperLink:
    """
    Hyperlink inside a paragraph

    Wraps a w:hyperlink element. Display runs are added first; the target
    may be set (or set again) later, each time creating a new external
    relationship on the document part.
    """

    def __init__(self, paragraph: Paragraph) -> None:
        self.paragraph = paragraph
        self.element = OxmlElement("w:hyperlink")
        paragraph._p.append(self.element)
        self.target: Optional[str] = None

    def run_add(self, text: str = "", **formatting) -> Run:
        """Append a display run; formatting as for run_format()"""
        r = OxmlElement("w:r")
        self.element.append(r)
        run = Run(r, self.paragraph)
        run.text = text
        return run_format(run, **formatting)

    def target_set(self, url: str) -> None:
        rel_id = self.paragraph.part.relate_to(url, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)
        self.element.set(qn("r:id"), rel_id)
        self.target = url

    @property
    def text(self) -> str:
        return "".join(t.text or "" for t in self.element.iter(qn("w:t")))

    def __repr__(self) -> str:
        return f"HyperLink(text={self.text!r}, target={self.target!r})"


class AnchoredImage:
    """
    Floating picture anchored to a run

    Setters mirror the anchor properties Word exposes: size, horizontal
    alignment, vertical origin and text wrapping.
    """

    def __init__(self, anchor) -> None:
        self.anchor = anchor

    @classmethod
    def inline_convert(cls, inline) -> "AnchoredImage":
        """Build a wp:anchor from a freshly generated wp:inline picture"""
        anchor = parse_xml(ANCHOR_XML)
        for child in list(inline):
            if child.tag == qn("wp:effectExtent"):
                continue
            anchor.append(child)
        return cls(anchor)

    def size_set(self, width: int, height: int) -> None:
        """Set frame and picture size, both in EMU"""
        extent = self.anchor.find(qn("wp:extent"))
        extent.set("cx", str(width))
        extent.set("cy", str(height))
        for ext in self.anchor.iter(qn("a:ext")):
            ext.set("cx", str(width))
            ext.set("cy", str(height))

    def horizontalAlign_set(self, align: str = "center", relative_from: str = "column") -> None:
        position = self.anchor.find(qn("wp:positionH"))
        position.set("relativeFrom", relative_from)
        for child in list(position):
            position.remove(child)
        align_element = OxmlElement("wp:align")
        align_element.text = align
        position.append(align_element)

    def verticalOrigin_set(self, relative_from: str = "paragraph", offset: int = 0) -> None:
        position = self.anchor.find(qn("wp:positionV"))
        position.set("relativeFrom", relative_from)
        for child in list(position):
            position.remove(child)
        offset_element = OxmlElement("wp:posOffset")
        offset_element.text = str(offset)
        position.append(offset_element)

    def wrap_set(self, mode: str = "topAndBottom") -> None:
        """
        Set text wrapping

        Args:
            mode: "none", "square" or "topAndBottom"
        """
        if mode not in WRAP_MODES:
            raise DocumentModelError(f"Unknown wrap mode: {mode}")
        for tag in WRAP_MODES.values():
            for existing in self.anchor.findall(qn(tag)):
                self.anchor.remove(existing)
        wrap = OxmlElement(WRAP_MODES[mode])
        if mode == "square":
            wrap.set("wrapText", "bothSides")
        self.anchor.find(qn("wp:docPr")).addprevious(wrap)

    @property
    def extent(self) -> tuple:
        extent = self.anchor.find(qn("wp:extent"))
        return int(extent.get("cx")), int(extent.get("cy"))


class DocxDocument:
    """
    The single output document shared by every note in a run

    Attributes:
        document: Underlying python-docx Document
    """

    def __init__(self, template: Optional[str] = None) -> None:
        self.document = docx.Document(template)

    def paragraph_add(self, style: Optional[str] = None) -> Paragraph:
        """
        Append a paragraph at the end of the body

        Raises:
            DocumentModelError: If the style is not defined in the document
        """
        paragraph = self.document.add_paragraph()
        if style:
            try:
                paragraph.style = style
            except KeyError:
                raise DocumentModelError(f"Unknown paragraph style: {style}")
        return paragraph

    def hyperlink_add(self, paragraph: Paragraph) -> HyperLink:
        return HyperLink(paragraph)

    def picture_anchor(self, run: Run, image: ImageInfo, width: int, height: int) -> AnchoredImage:
        """
        Embed an image in the document and anchor it to a run

        Args:
            run: Run that will hold the drawing
            image: Loaded image
            width: Frame width in EMU
            height: Frame height in EMU

        Returns:
            AnchoredImage for setting alignment, origin and wrapping

        Raises:
            ImageLoadError: If python-docx cannot read the image format
        """
        try:
            inline = run.part.new_pic_inline(str(image.path), width, height)
        except UnrecognizedImageError:
            raise ImageLoadError(f"Unsupported image format: {image.path}")
        anchored = AnchoredImage.inline_convert(inline)
        anchored.size_set(width, height)
        run._r.add_drawing(anchored.anchor)
        return anchored

    def sectionBreak_add(self) -> None:
        """Append an empty paragraph ending the section; the next one starts a new page"""
        self.document.add_section(WD_SECTION.NEW_PAGE)

    def save(self, path: Union[str, Path]) -> Path:
        """
        Write the document

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        output_path = Path(path)
        try:
            self.document.save(str(output_path))
        except OSError as e:
            raise DocumentSaveError(f"Cannot save {output_path}: {e}")
        return output_path

    @property
    def paragraphs(self) -> List[Paragraph]:
        return self.document.paragraphs
