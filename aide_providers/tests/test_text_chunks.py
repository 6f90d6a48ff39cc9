"""Word splitting used for simulated text deltas."""
from __future__ import annotations

import pytest

from aide_providers.base.streaming import split_into_words


def test_split_basic():
    assert split_into_words("Hello there") == ["Hello ", "there"]  # nosec B101


def test_split_empty():
    assert split_into_words("") == []  # nosec B101


@pytest.mark.parametrize(
    "text",
    [
        "Hello there",
        "  leading and trailing  ",
        "tabs\tand\nnewlines\n\n",
        "\n",
        "   ",
        "unicode café\u2003naïve",
        "single",
    ],
)
def test_split_round_trip_is_exact(text):
    chunks = split_into_words(text)
    assert "".join(chunks) == text  # nosec B101
    assert all(chunks)  # nosec B101


def test_leading_whitespace_folds_into_first_chunk():
    assert split_into_words("  a b") == ["  a ", "b"]  # nosec B101
    assert split_into_words(" \t ") == [" \t "]  # nosec B101
