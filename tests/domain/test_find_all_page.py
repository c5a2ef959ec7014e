"""Unit tests for the pagination request and result types."""

import pytest

from orderstore.domain.exceptions import ValidationError
from orderstore.domain.repository.order_repository import (
    START_CURSOR,
    FindAllPage,
    FindResult,
)


class TestFindAllPage:

    def test_defaults_to_start_cursor(self):
        assert FindAllPage(size=5).cursor == START_CURSOR

    def test_zero_size_rejected(self):
        with pytest.raises(ValidationError, match="positive integer"):
            FindAllPage(size=0)

    def test_empty_cursor_rejected(self):
        with pytest.raises(ValidationError, match="Invalid cursor"):
            FindAllPage(size=5, cursor="")


class TestFindResult:

    def test_none_cursor_is_exhausted(self):
        assert FindResult(orders=[], next_cursor=None).exhausted

    def test_start_cursor_is_not_terminal(self):
        # The first-page cursor never doubles as the end marker
        assert not FindResult(orders=[], next_cursor=START_CURSOR).exhausted
