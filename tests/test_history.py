"""Tests for query history and Up/Down recall."""

import dataclasses

import pytest

from logscope_agent.session.history import HistoryNavigator, QueryHistory, QueryHistoryEntry


@pytest.fixture
def history():
    h = QueryHistory()
    for q in ("q1", "q2", "q3"):
        h.append(QueryHistoryEntry(query=q))
    return h


def test_history_is_ordered_oldest_first(history):
    assert [e.query for e in history] == ["q1", "q2", "q3"]
    assert history.latest.query == "q3"
    assert history.recent(0).query == "q3"
    assert history.recent(2).query == "q1"


def test_recent_out_of_range(history):
    with pytest.raises(IndexError):
        history.recent(3)


def test_entries_are_immutable():
    entry = QueryHistoryEntry(query="q")
    assert entry.timestamp
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.query = "changed"


def test_up_then_down_sequence(history):
    nav = HistoryNavigator(history)
    assert nav.is_browsing

    assert [nav.up(), nav.up(), nav.up()] == ["q3", "q2", "q1"]
    assert nav.up() == "q1"
    assert nav.index == 2

    assert [nav.down(), nav.down()] == ["q2", "q3"]
    assert nav.down() == ""
    assert nav.is_browsing


def test_down_while_browsing_is_noop(history):
    nav = HistoryNavigator(history)
    nav.query = "typing"
    assert nav.down() == "typing"
    assert nav.is_browsing


def test_up_with_empty_history_is_noop():
    nav = HistoryNavigator(QueryHistory())
    assert nav.up() == ""
    assert nav.is_browsing


def test_reset_clears_input(history):
    nav = HistoryNavigator(history)
    nav.up()
    nav.reset()
    assert nav.is_browsing
    assert nav.query == ""


def test_navigator_sees_new_entries(history):
    nav = HistoryNavigator(history)
    history.append(QueryHistoryEntry(query="q4"))
    assert nav.up() == "q4"
