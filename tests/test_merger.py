import pytest

from conftest import make_encrypted_pdf, make_pdf, page_widths
from document import EmptyJoinError, InvalidDocumentError
from merger import join_pdfs


def test_join_two_single_page_documents():
    a = make_pdf([11])
    b = make_pdf([22])
    assert page_widths(join_pdfs([a, b])) == [11, 22]


def test_join_preserves_input_order(three_pages, five_pages):
    assert page_widths(join_pdfs([five_pages, three_pages])) == [
        101, 102, 103, 104, 105, 201, 202, 203,
    ]


def test_join_page_count_is_sum(three_pages, five_pages):
    result = join_pdfs([three_pages, five_pages, three_pages])
    assert len(page_widths(result)) == 3 + 5 + 3


def test_join_single_document_copies_it(five_pages):
    assert page_widths(join_pdfs([five_pages])) == page_widths(five_pages)


def test_join_accepts_generator(three_pages):
    assert len(page_widths(join_pdfs(doc for doc in [three_pages, three_pages]))) == 6


def test_join_same_document_twice(three_pages):
    assert page_widths(join_pdfs([three_pages, three_pages])) == [201, 202, 203, 201, 202, 203]


def test_join_empty_list_is_rejected():
    with pytest.raises(EmptyJoinError):
        join_pdfs([])


def test_join_names_malformed_input(three_pages):
    with pytest.raises(InvalidDocumentError) as excinfo:
        join_pdfs([three_pages, b"not a pdf"])
    assert "#1" in str(excinfo.value)


def test_join_rejects_encrypted_input(three_pages):
    with pytest.raises(InvalidDocumentError):
        join_pdfs([three_pages, make_encrypted_pdf([100])])


def test_documents_closed_after_join(three_pages, five_pages, tracked_documents):
    created, closed = tracked_documents
    join_pdfs([three_pages, five_pages])
    assert len(created) == 3
    assert all(doc in closed for doc in created)


def test_documents_closed_after_malformed_input(three_pages, tracked_documents):
    created, closed = tracked_documents
    with pytest.raises(InvalidDocumentError):
        join_pdfs([three_pages, b"bad"])
    assert len(created) == 2
    assert all(doc in closed for doc in created)
