import io

import pytest
from PyPDF2 import PdfReader, PdfWriter


def make_pdf(widths):
    """Build a PDF with one blank page per width, so pages can be told apart."""
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=100)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def page_widths(data):
    reader = PdfReader(io.BytesIO(data))
    return [int(float(page.mediabox.width)) for page in reader.pages]


@pytest.fixture
def five_pages():
    return make_pdf([101, 102, 103, 104, 105])


@pytest.fixture
def three_pages():
    return make_pdf([201, 202, 203])


def make_encrypted_pdf(widths, password="pw"):
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=100)
    writer.encrypt(password)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def tracked_documents(monkeypatch):
    """Record every PdfDocument created and every one closed."""
    from document import PdfDocument

    created, closed = [], []
    original_init = PdfDocument.__init__
    original_close = PdfDocument.close

    def init(self, *args, **kwargs):
        original_init(self, *args, **kwargs)
        created.append(self)

    def close(self):
        closed.append(self)
        original_close(self)

    monkeypatch.setattr(PdfDocument, "__init__", init)
    monkeypatch.setattr(PdfDocument, "close", close)
    return created, closed
