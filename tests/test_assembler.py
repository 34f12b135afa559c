"""
Assembler tests

Assembles lexed notes into a real python-docx document and inspects the
resulting paragraphs, runs, hyperlinks, images and section breaks.
"""

import pytest
from docx.oxml.ns import qn
from docx.shared import Inches
from PIL import Image

from notedocx.lib.assembler import Assembler
from notedocx.lib.document import DocxDocument
from notedocx.lib.errors import ImageLoadError
from notedocx.lib.lexer import tokenize
from notedocx.lib.theme import Theme
from notedocx.models.tokens import Token, TokenKind


def assemble(source, assets_dir=".", title="note.md", theme=None):
    """Assemble one note into a fresh document"""
    document = DocxDocument()
    assembler = Assembler(document, assets_dir, theme)
    assembler.assemble(title, tokenize(source))
    return document, assembler


def content_paragraphs(document, title="note.md"):
    """Paragraphs after the title"""
    paragraphs = document.paragraphs
    start = next(i for i, p in enumerate(paragraphs) if p.text == title)
    return paragraphs[start + 1:]


def hyperlinks(document):
    return [link for p in document.paragraphs for link in p.hyperlinks]


def section_breaks(document):
    return document.document.element.body.xpath("./w:p[w:pPr/w:sectPr]")


def anchors(document):
    return document.document.element.body.xpath(".//wp:anchor")


@pytest.fixture
def assets(tmp_path):
    """Assets directory with a 200x100 PNG"""
    assets_dir = tmp_path / "assets"
    assets_dir.mkdir()
    Image.new("RGB", (200, 100), color=(200, 30, 30)).save(assets_dir / "pic.png")
    return assets_dir


class TestFileFraming:
    """Title paragraph and trailing section break"""

    def test_title_paragraph(self):
        """File name becomes a Heading 1 paragraph"""
        document, _ = assemble("hello", title="2024-01-05.md")
        title = next(p for p in document.paragraphs if p.text == "2024-01-05.md")
        assert title.style.name == "Heading 1"

    def test_blank_paragraph_after_title(self):
        """Content starts in the blank paragraph after the title"""
        document, _ = assemble("hello")
        assert content_paragraphs(document)[0].text == "hello"

    def test_section_break_per_file(self):
        """Each assembled file ends with a page section break"""
        document, _ = assemble("hello")
        assert len(section_breaks(document)) == 1

    def test_empty_note(self):
        """Empty file still gets a title and a section break"""
        document, _ = assemble("")
        assert any(p.text == "note.md" for p in document.paragraphs)
        assert len(section_breaks(document)) == 1


class TestTextAndLines:
    """Text runs and newline handling"""

    def test_each_line_new_paragraph(self):
        """Lines land in separate paragraphs"""
        document, _ = assemble("first\nsecond")
        texts = [p.text for p in content_paragraphs(document)]
        assert texts[0] == "first"
        assert texts[1] == "second"

    def test_bullet(self):
        """Bullet line becomes a '- ' prefixed run"""
        document, _ = assemble("- item")
        assert content_paragraphs(document)[0].text == "- item"

    def test_bullet_without_text_ignored(self):
        """Lone bullet adds nothing"""
        document, _ = assemble("-")
        assert content_paragraphs(document)[0].text == ""

    def test_heading(self):
        """Heading line becomes a bold Heading 2 paragraph"""
        document, _ = assemble("# Plans")
        heading = next(p for p in document.paragraphs if p.text == "Plans")
        assert heading.style.name == "Heading 2"
        assert heading.runs[0].bold is True

    def test_heading_without_text_ignored(self):
        """Lone heading marker adds no heading paragraph"""
        document, _ = assemble("#\nafter")
        assert not [p for p in document.paragraphs if p.style.name == "Heading 2"]
        texts = [p.text for p in content_paragraphs(document)]
        assert texts[0] == ""
        assert texts[1] == "after"

    def test_heading_followed_by_blank_paragraph(self):
        """Text after a heading does not go into the heading paragraph"""
        document, _ = assemble("# Plans\nmore")
        paragraphs = content_paragraphs(document)
        index = next(i for i, p in enumerate(paragraphs) if p.text == "Plans")
        assert paragraphs[index + 1].text == ""
        assert paragraphs[index].text == "Plans"

    def test_code_run(self):
        """Code span is a bold monospace run"""
        document, _ = assemble("run `make test` now")
        paragraph = content_paragraphs(document)[0]
        assert paragraph.text == "run make test now"
        code_run = paragraph.runs[1]
        assert code_run.text == "make test"
        assert code_run.bold is True
        assert code_run.font.name == "Courier New"

    def test_code_font_from_theme(self, tmp_path):
        """Theme overrides the code font"""
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text("code:\n  font: Consolas\n")
        document, _ = assemble("`x`", theme=Theme(str(theme_file)))
        assert content_paragraphs(document)[0].runs[0].font.name == "Consolas"


class TestHyperlinks:
    """[name](target) links"""

    def test_link(self):
        """Link becomes one hyperlink with name and target"""
        document, assembler = assemble("[name](target)")
        links = hyperlinks(document)
        assert len(links) == 1
        assert links[0].text == "name"
        assert links[0].url == "target"
        assert assembler.hyperlink_count == 1

    def test_link_run_style(self):
        """Display run is underlined in the link colour"""
        document, _ = assemble("[name](https://example.org)")
        run = hyperlinks(document)[0].runs[0]
        assert run.font.underline is True
        assert str(run.font.color.rgb) == "0563C1"

    def test_link_in_sentence(self):
        """Text around the link stays in the same paragraph"""
        document, _ = assemble("read [the docs](https://d.org) first")
        paragraph = content_paragraphs(document)[0]
        assert [r.text for r in paragraph.runs] == ["read ", " first"]
        assert paragraph.hyperlinks[0].text == "the docs"

    def test_bracket_without_link_is_text(self):
        """Unmatched '[' degrades to a literal bracket"""
        document, _ = assemble("[not a link")
        assert content_paragraphs(document)[0].text == "[not a link"
        assert hyperlinks(document) == []

    def test_target_without_hyperlink_is_text(self):
        """'(target)' with no hyperlink open becomes plain text"""
        document, _ = assemble("[](orphan)")
        assert content_paragraphs(document)[0].text == "[orphan"
        assert hyperlinks(document) == []

    def test_target_tokens_without_name(self):
        """LinkTargetStart with no current hyperlink, straight from tokens"""
        document = DocxDocument()
        assembler = Assembler(document, ".")
        assembler.assemble("note.md", [
            Token(TokenKind.LINK_TARGET_START, "("),
            Token(TokenKind.TEXT, "target"),
            Token(TokenKind.LINK_TARGET_END, ")"),
        ])
        assert content_paragraphs(document)[0].text == "target"

    def test_stale_hyperlink_is_retargeted(self):
        """A later nameless target reuses the previous hyperlink"""
        document, _ = assemble("[a](first)\n[](second)")
        links = hyperlinks(document)
        assert len(links) == 1
        assert links[0].url == "second"

    def test_hyperlink_reset_between_files(self):
        """A new file starts without a current hyperlink"""
        document = DocxDocument()
        assembler = Assembler(document, ".")
        assembler.assemble("a.md", tokenize("[a](first)"))
        assembler.assemble("b.md", tokenize("[](second)"))
        links = hyperlinks(document)
        assert len(links) == 1
        assert links[0].url == "first"


class TestImages:
    """![[image]] links"""

    def test_image_anchored(self, assets):
        """Image is anchored once with aspect-preserving size"""
        document, assembler = assemble("![[pic.png]]", assets)
        found = anchors(document)
        assert len(found) == 1
        assert assembler.image_count == 1

        width = int(Inches(5.5))
        extent = found[0].find(qn("wp:extent"))
        assert int(extent.get("cx")) == width
        assert int(extent.get("cy")) == int(width * (100 / 200))

    def test_image_position_and_wrap(self, assets):
        """Centered on the column, paragraph-relative, top-and-bottom wrap"""
        document, _ = assemble("![[pic.png]]", assets)
        body = document.document.element.body
        assert body.xpath(".//wp:anchor/wp:positionH/@relativeFrom") == ["column"]
        assert body.xpath(".//wp:anchor/wp:positionH/wp:align/text()") == ["center"]
        assert body.xpath(".//wp:anchor/wp:positionV/@relativeFrom") == ["paragraph"]
        assert len(body.xpath(".//wp:anchor/wp:wrapTopAndBottom")) == 1

    def test_new_paragraph_after_image(self, assets):
        """Content after the image starts in a fresh paragraph"""
        document, _ = assemble("![[pic.png]] caption", assets)
        paragraphs = content_paragraphs(document)
        index = next(i for i, p in enumerate(paragraphs) if p._p.xpath(".//wp:anchor"))
        assert paragraphs[index + 1].text == " caption"
        assert not paragraphs[index + 1]._p.xpath(".//wp:anchor")

    def test_image_theme_width(self, assets, tmp_path):
        """Theme sets the fixed image width"""
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text("image:\n  width_inches: 2\n")
        document, _ = assemble("![[pic.png]]", assets, theme=Theme(str(theme_file)))
        anchored_extent = document.document.element.body.xpath(".//wp:anchor/wp:extent/@cx")
        assert anchored_extent == [str(int(Inches(2)))]

    def test_image_without_closing_marker(self, assets):
        """Missing ']]' still embeds the named image"""
        document, assembler = assemble("![[pic.png\nnext", assets)
        assert len(anchors(document)) == 1
        assert assembler.image_count == 1
        assert "next" in [p.text for p in content_paragraphs(document)]

    def test_missing_image_is_fatal(self, assets):
        """Missing image file raises"""
        with pytest.raises(ImageLoadError, match="not found"):
            assemble("![[missing.png]]", assets)

    def test_undecodable_image_is_fatal(self, assets):
        """Non-image file raises"""
        (assets / "broken.png").write_bytes(b"not an image")
        with pytest.raises(ImageLoadError):
            assemble("![[broken.png]]", assets)

    def test_image_marker_without_name_ignored(self, assets):
        """'![[' with nothing after it adds no image"""
        document, _ = assemble("![[", assets)
        assert anchors(document) == []
