import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from document import InvalidRangeError, PdfDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRange:
    """1-indexed, inclusive slice of a document's pages."""

    start: int
    end: int

    def validate(self, page_count: int) -> None:
        if self.start < 1 or self.end > page_count or self.start > self.end:
            raise InvalidRangeError(self.start, self.end, page_count)

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))


def split_pdf(data: bytes, start_page: int, end_page: Optional[int] = None) -> bytes:
    """
    Copy pages `start_page`..`end_page` (1-indexed, inclusive) into a new PDF.

    An `end_page` of None runs through the last page. The range is checked
    against the opened document's real page count before any page is copied.
    """
    with PdfDocument.open(data) as source:
        total_pages = source.page_count
        page_range = PageRange(start_page, total_pages if end_page is None else end_page)
        page_range.validate(total_pages)

        with PdfDocument.new() as output:
            for number in page_range:
                output.append_page(source.page(number))
            result = output.serialize()

    logger.info(
        "Split pages %d-%d of %d into a %d-page document",
        page_range.start, page_range.end, total_pages, len(page_range),
    )
    return result
