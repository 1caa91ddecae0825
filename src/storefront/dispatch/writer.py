"""Document writer port: turns titled pages of text into a downloadable file.

The plain-text writer is the default. A PDF writer can be registered with
``set_writer`` without touching the slip or report code.
"""

from abc import ABC, abstractmethod

PAGE_BREAK = "\f"


class DocumentWriter(ABC):
    """Abstract interface for document renderers."""

    media_type: str = "application/octet-stream"
    extension: str = "bin"

    @abstractmethod
    def render(self, title: str, pages: list[list[str]]) -> bytes:
        """Render ``pages`` (each a list of lines) into a single document."""
        ...


class PlainTextWriter(DocumentWriter):
    """Pages of UTF-8 text separated by form feeds, the title heading the first page."""

    media_type = "text/plain; charset=utf-8"
    extension = "txt"

    def render(self, title: str, pages: list[list[str]]) -> bytes:
        heading = [title, "=" * len(title), ""] if title else []
        rendered = ["\n".join((heading if index == 0 else []) + lines) + "\n" for index, lines in enumerate(pages)]
        return PAGE_BREAK.join(rendered).encode("utf-8")


_writer: DocumentWriter | None = None


def get_writer() -> DocumentWriter:
    global _writer
    if _writer is None:
        _writer = PlainTextWriter()
    return _writer


def set_writer(writer: DocumentWriter) -> None:
    global _writer
    _writer = writer


def reset_writer() -> None:
    global _writer
    _writer = None
