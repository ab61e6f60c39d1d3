import logging

import pytest

from core.analysis.search import search_term, SearchStatus, SearchResult
from core.exceptions import ValidationError


def test_single_row_replacement(memory_store):
    memory_store.save("Hello World")
    memory_store.save("Second text")

    assert search_term(memory_store, "Hello").found is False
    assert search_term(memory_store, "Second").found is True


def test_search_is_case_sensitive(memory_store):
    memory_store.save("Hello World")

    assert search_term(memory_store, "World").found is True
    result = search_term(memory_store, "world")
    assert result.found is False
    assert result.status is SearchStatus.NOT_FOUND


@pytest.mark.parametrize("term", ["Hello", "x", "Hello World", " "])
def test_empty_store_reports_no_data(memory_store, term):
    result = search_term(memory_store, term)

    assert result.found is False
    assert result.status is SearchStatus.NO_DATA


def test_substring_match_without_tokenization(memory_store):
    memory_store.save("Hello World")

    assert search_term(memory_store, "lo Wo").status is SearchStatus.FOUND
    assert search_term(memory_store, "Hello World").found is True
    assert search_term(memory_store, "Hello World!").found is False


def test_storage_error_reported_as_not_found(failing_store, caplog):
    caplog.set_level(logging.ERROR, logger="core.analysis.search")

    result = search_term(failing_store, "Hello")

    assert result.found is False
    assert result.status is SearchStatus.STORAGE_ERROR
    assert "Error searching term" in caplog.text
    assert "disk I/O error" in caplog.text


def test_empty_term_rejected_before_store(failing_store):
    with pytest.raises(ValidationError) as exc_info:
        search_term(failing_store, "")

    assert exc_info.value.client_message == "Term is required"


def test_result_collapses_to_boolean():
    assert SearchResult("a", SearchStatus.FOUND).to_dict() == {"term": "a", "found": True}
    for status in (SearchStatus.NOT_FOUND, SearchStatus.NO_DATA, SearchStatus.STORAGE_ERROR):
        assert SearchResult("a", status).to_dict() == {"term": "a", "found": False}
