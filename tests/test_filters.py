"""
Test Transform Layer - record filtering and display formatting
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from logparser.extract.models import Actor, Record
from logparser.transformation.filters import (
    describe_filters,
    filter_records,
    format_display,
    records_to_frame,
)
from logparser.transformation.schemas import EVENTS_SCHEMA

RECORDS = [
    Record(id="1", type="PushEvent", actor=Actor(login="Octocat")),
    Record(id="2", type="WatchEvent", actor=Actor(login="hubot")),
    Record(id="3", type="pushevent", actor=Actor(login="monalisa-octo")),
    Record(id="4", type="PushEvent"),
    Record(id="5", type="PUSHEVENT", actor=Actor(login="octo-bot")),
]


def ids(records):
    return [r.id for r in records]


def test_no_filters_returns_everything():
    assert ids(filter_records(RECORDS)) == ["1", "2", "3", "4", "5"]


def test_type_filter_is_case_insensitive_exact():
    assert ids(filter_records(RECORDS, event_type="PushEvent")) == ["1", "3", "4", "5"]
    assert filter_records(RECORDS, event_type="Push") == []


def test_actor_filter_is_case_insensitive_substring():
    assert ids(filter_records(RECORDS, actor="OCTO")) == ["1", "3", "5"]


def test_actor_filter_skips_records_without_login():
    assert "4" not in ids(filter_records(RECORDS, actor="o"))


def test_filters_combine_then_limit():
    result = filter_records(RECORDS, event_type="pushevent", actor="octo", limit=2)

    assert ids(result) == ["1", "3"]


def test_non_positive_limit_is_ignored():
    assert len(filter_records(RECORDS, limit=0)) == 5
    assert len(filter_records(RECORDS, limit=-1)) == 5


def test_empty_input():
    assert filter_records([], event_type="PushEvent", actor="x", limit=3) == []


def test_filtering_does_not_mutate_input():
    before = list(RECORDS)
    filter_records(RECORDS, event_type="WatchEvent", limit=1)

    assert RECORDS == before


def test_frame_schema():
    df = records_to_frame(RECORDS)

    assert df.height == 5
    assert df.drop("row_nr").schema == EVENTS_SCHEMA


def test_describe_filters():
    assert describe_filters("PushEvent", "octo") == "type='PushEvent', actor contains 'octo'"
    assert describe_filters(None, None) == ""


def test_format_display():
    lines = format_display(RECORDS[:2], limit=2)

    assert lines[0] == "Displaying 2 log entries:"
    assert lines[1] == "(Limited to 2 entries)"
    assert set(lines[2]) == {"="}
    assert lines[3] == "Record{id='1', type='PushEvent', actor=Octocat}"
    assert lines[4] == "Record{id='2', type='WatchEvent', actor=hubot}"
