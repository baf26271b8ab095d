"""Tests for tag derivation."""

import pytest

from modbook.tags import to_tag


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Intro", "intro"),
        ("Getting Started!", "getting_started_"),
        ("Traits & Generics", "traits___generics"),
        ("Unit 2.1", "unit_2_1"),
        ("Ünïcode", "ünïcode"),
        ("", ""),
    ],
)
def test_to_tag(title, expected):
    assert to_tag(title) == expected
