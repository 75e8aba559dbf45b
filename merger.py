import logging
from contextlib import ExitStack
from typing import Iterable

from document import EmptyJoinError, InvalidDocumentError, PdfDocument

logger = logging.getLogger(__name__)


def join_pdfs(documents: Iterable[bytes]) -> bytes:
    """
    Concatenate the pages of every input PDF, in input order, into one PDF.

    Inputs stay open until the output is serialized. Raises EmptyJoinError
    when no documents are given and InvalidDocumentError (naming the input's
    position) when one of them cannot be read.
    """
    with ExitStack() as stack:
        output = stack.enter_context(PdfDocument.new())
        joined = 0

        for index, data in enumerate(documents):
            try:
                source = stack.enter_context(PdfDocument.open(data))
            except InvalidDocumentError as exc:
                raise InvalidDocumentError(f"Document #{index}: {exc}") from exc

            for number in range(1, source.page_count + 1):
                output.append_page(source.page(number))
            joined += 1
            logger.debug("Appended %d page(s) from document #%d", source.page_count, index)

        if joined == 0:
            raise EmptyJoinError("At least one document is required to join")

        total_pages = output.page_count
        result = output.serialize()

    logger.info("Joined %d document(s) into %d page(s)", joined, total_pages)
    return result
