"""
Document-model data structures

Value types passed between the image loader, the document adapter and
the assembler.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ImageInfo:
    """
    A decoded image referenced by a note

    Attributes:
        path: Resolved image file path (assets base + "/" + link text)
        width_px: Pixel width reported by the decoder
        height_px: Pixel height reported by the decoder
    """
    path: Path
    width_px: int
    height_px: int

    def height_forWidth(self, width: int) -> int:
        """
        Height that preserves the aspect ratio at the given width

        Args:
            width: Target width (any unit, typically EMU)

        Returns:
            width * (height_px / width_px), truncated to an int
        """
        return int(width * (self.height_px / self.width_px))
