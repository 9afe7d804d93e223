"""Tests for PageState and PageNavigator.

Tests cover:

- PageState invariant enforcement and helpers
- next() appending pages, previous() at the first page, goto() with
  and without creating pages, remove_all_next(), reset()
- Queries always re-reading the remote session
"""

from __future__ import annotations

from unittest import mock

import pytest

from tetris_bridge.errors import RemoteSessionError
from tetris_bridge.navigation import PageNavigator, PageState
from tetris_bridge.session import fumen_js


class TestPageState:
    def test_valid(self):
        state = PageState(current_frame=2, frame_count=3)
        assert state.page_number == 3
        assert not state.is_first

    def test_single_page_is_minimal_state(self):
        state = PageState(0, 1)
        assert state.is_first
        assert state.page_number == 1

    @pytest.mark.parametrize("current,count", [(0, 0), (1, 1), (-1, 2), (5, 3)])
    def test_invariant_violations(self, current, count):
        with pytest.raises(ValueError):
            PageState(current, count)


class TestPageNavigator:
    def test_initial_state(self, fake_editor):
        assert PageNavigator(fake_editor).state() == PageState(0, 1)

    def test_next_appends_when_on_last_page(self, fake_editor):
        nav = PageNavigator(fake_editor)
        nav.next()
        assert nav.state() == PageState(1, 2)

    def test_next_does_not_append_in_the_middle(self, fake_editor):
        nav = PageNavigator(fake_editor)
        nav.goto(3)
        nav.goto(1)
        nav.next()
        assert nav.state() == PageState(1, 3)

    def test_page_number_increments_after_next(self, fake_editor):
        nav = PageNavigator(fake_editor)
        before = nav.page_number()
        nav.next()
        assert nav.page_number() == before + 1

    def test_previous_at_first_page(self, fake_editor):
        nav = PageNavigator(fake_editor)
        assert nav.previous() is False
        assert nav.state() == PageState(0, 1)
        assert fake_editor.mutations == []

    def test_previous(self, fake_editor):
        nav = PageNavigator(fake_editor)
        nav.next()
        assert nav.previous() is True
        assert nav.state() == PageState(0, 2)

    def test_goto_is_one_based(self, fake_editor):
        nav = PageNavigator(fake_editor)
        nav.goto(3)
        assert nav.page_number() == 3
        assert ("evaluate", fumen_js.GOTO_PAGE_JS, (2,)) in fake_editor.calls

    def test_goto_rejects_zero(self, fake_editor):
        with pytest.raises(ValueError):
            PageNavigator(fake_editor).goto(0)

    def test_remove_all_next(self, fake_editor):
        nav = PageNavigator(fake_editor)
        nav.goto(5)
        nav.goto(2)
        nav.remove_all_next()
        assert nav.state() == PageState(1, 2)

    def test_reset(self, fake_editor):
        nav = PageNavigator(fake_editor)
        nav.goto(4)
        fake_editor.set_board_cell(0, 3)
        nav.reset()
        assert nav.state() == PageState(0, 1)
        assert set(fake_editor.field) == {0}

    def test_queries_are_never_cached(self, fake_editor):
        nav = PageNavigator(fake_editor)
        assert nav.page_count() == 1
        fake_editor.frames.append([0] * 240)
        assert nav.page_count() == 2

    def test_non_numeric_reply(self):
        remote = mock.MagicMock()
        remote.evaluate.return_value = "oops"
        with pytest.raises(RemoteSessionError, match="current page"):
            PageNavigator(remote).page_number()
