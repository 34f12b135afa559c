"""
Fatal error types for notedocx

Any of these aborts the whole conversion run; nothing is saved.
Unmatched delimiters and other lexer/assembler edge cases are not errors,
they degrade to plain text.
"""


class NotedocxError(Exception):
    """Base class for fatal conversion errors"""
    pass


class NoteReadError(NotedocxError):
    """Raised when a note file cannot be read"""
    pass


class ImageLoadError(NotedocxError):
    """Raised when a linked image is missing or cannot be decoded"""
    pass


class DocumentModelError(NotedocxError):
    """Raised when the document model rejects an operation (e.g. unknown style)"""
    pass


class DocumentSaveError(NotedocxError):
    """Raised when the assembled document cannot be written"""
    pass
