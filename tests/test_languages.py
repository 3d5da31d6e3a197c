import logging

from site_search_index.search.languages import (
    SUPPORTED_LANGUAGES,
    filter_languages,
    filter_languages_with_warnings,
)


def test_filter_normalizes_and_drops_unsupported(caplog):
    with caplog.at_level(logging.WARNING, logger="search.languages"):
        result = filter_languages(["FR", "xx", "es"])

    assert result == ["fr", "es"]
    assert "xx is not supported" in caplog.text


def test_filter_reports_warnings():
    accepted, warnings = filter_languages_with_warnings(["de", "Klingon", "EN"])

    assert accepted == ["de", "en"]
    assert [w.code for w in warnings] == ["klingon"]
    assert warnings[0].message == "klingon is not supported"


def test_baseline_is_always_accepted():
    assert "en" not in SUPPORTED_LANGUAGES
    assert filter_languages(["en"]) == ["en"]


def test_filter_keeps_duplicates_and_order():
    assert filter_languages(["es", "fr", "ES"]) == ["es", "fr", "es"]


def test_filter_empty():
    assert filter_languages([]) == []


def test_lunr_languages_dutch_code_is_aliased(caplog):
    with caplog.at_level(logging.WARNING, logger="search.languages"):
        assert filter_languages(["du", "DU", "nl"]) == ["nl", "nl", "nl"]

    assert "not supported" not in caplog.text
