"""
Test Cursor Extractor - Link header parsing
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logparser.extract.links import extract_next_url


def test_next_entry_is_returned():
    header = (
        '<https://api.example/events?page=2>; rel="next", '
        '<https://api.example/events?page=1>; rel="prev"'
    )

    assert extract_next_url(header) == "https://api.example/events?page=2"


def test_next_entry_not_first():
    header = (
        '<https://api.github.com/events?page=1>; rel="prev", '
        '<https://api.github.com/events?page=3>; rel="next", '
        '<https://api.github.com/events?page=10>; rel="last"'
    )

    assert extract_next_url(header) == "https://api.github.com/events?page=3"


def test_no_next_entry():
    header = (
        '<https://api.example/events?page=1>; rel="first", '
        '<https://api.example/events?page=4>; rel="prev"'
    )

    assert extract_next_url(header) is None


def test_absent_or_empty_header():
    assert extract_next_url(None) is None
    assert extract_next_url("") is None


def test_malformed_entries_are_skipped():
    header = 'https://broken.example; rel="next", <https://api.example/events?page=2>; rel="next"'

    assert extract_next_url(header) == "https://api.example/events?page=2"


def test_relation_must_match_exactly():
    header = '<https://api.example/events?page=2>; rel="nextish"'

    assert extract_next_url(header) is None


def test_url_containing_commas_is_kept_whole():
    header = (
        '<https://api.example/events?fields=id,type&page=2>; rel="next", '
        '<https://api.example/events?page=9>; rel="last"'
    )

    assert extract_next_url(header) == "https://api.example/events?fields=id,type&page=2"


def test_malformed_entry_after_valid_one_does_not_leak_its_relation():
    header = '<https://api.example/events?page=1>; rel="prev", garbage; rel="next"'

    assert extract_next_url(header) is None
