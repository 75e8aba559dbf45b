import io
from typing import Optional

import PyPDF2
from PyPDF2.errors import PdfReadError


class PdfAssemblyError(Exception):
    """Base class for all join/split failures."""


class InvalidDocumentError(PdfAssemblyError):
    """Input bytes are not a readable PDF document."""


class InvalidRangeError(PdfAssemblyError, ValueError):
    """Requested page range falls outside the document."""

    def __init__(self, start: int, end: int, page_count: int):
        self.start = start
        self.end = end
        self.page_count = page_count
        super().__init__(
            f"Invalid page range {start}-{end} for a document with {page_count} page(s)"
        )


class EmptyJoinError(PdfAssemblyError, ValueError):
    """Join was called without any documents."""


# Exceptions PyPDF2 raises while walking a damaged xref table or page tree
_READ_ERRORS = (PdfReadError, ValueError, KeyError, IndexError, TypeError)


class PdfDocument:
    """
    Thin wrapper over PyPDF2 exposing whole-page operations only.

    A document is either opened from bytes (import mode, read only) or
    created empty (writable). Page numbers are 1-indexed. Use it as a
    context manager so the underlying buffer is released on every exit path.
    """

    def __init__(self, reader: Optional[PyPDF2.PdfReader] = None, stream: Optional[io.BytesIO] = None):
        self._reader = reader
        self._stream = stream
        self._import_mode = reader is not None
        self._writer = None if self._import_mode else PyPDF2.PdfWriter()

    @classmethod
    def open(cls, data: bytes) -> "PdfDocument":
        """Open serialized PDF bytes for importing pages."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected bytes, got {type(data).__name__}")

        stream = io.BytesIO(bytes(data))
        try:
            reader = PyPDF2.PdfReader(stream)
            if reader.is_encrypted:
                raise InvalidDocumentError("Encrypted documents are not supported")
            # Force the page tree to load so damage surfaces here
            len(reader.pages)
        except InvalidDocumentError:
            stream.close()
            raise
        except _READ_ERRORS as exc:
            stream.close()
            raise InvalidDocumentError(f"Not a readable PDF document: {exc}") from exc

        return cls(reader=reader, stream=stream)

    @classmethod
    def new(cls) -> "PdfDocument":
        return cls()

    @property
    def read_only(self) -> bool:
        return self._import_mode

    @property
    def page_count(self) -> int:
        return len(self._pages())

    def page(self, number: int):
        """Return page `number` (1-indexed)."""
        if number < 1 or number > self.page_count:
            raise IndexError(f"page {number} out of range 1-{self.page_count}")
        return self._pages()[number - 1]

    def append_page(self, page) -> None:
        if self.read_only:
            raise ValueError("cannot append pages to a document opened for import")
        if self._writer is None:
            raise ValueError("document is closed")
        # PdfWriter.add_page clones the page into the writer
        self._writer.add_page(page)

    def serialize(self) -> bytes:
        if self.read_only:
            raise ValueError("documents opened for import are not re-serialized")
        if self._writer is None:
            raise ValueError("document is closed")
        buffer = io.BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        self._reader = None
        self._writer = None

    def _pages(self):
        if self._reader is not None:
            return self._reader.pages
        if self._writer is not None:
            return self._writer.pages
        raise ValueError("document is closed")

    def __enter__(self) -> "PdfDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
