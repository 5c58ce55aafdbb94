"""Unit tests for environment driven settings."""

from __future__ import annotations

import pytest

from aursrcinfo.constants import log_level


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        (None, "WARNING"),
        ("", "WARNING"),
        ("debug", "DEBUG"),
        ("Info", "INFO"),
        ("foo", "WARNING"),
    ],
)
def test_log_level(name: str | None, expected: str) -> None:
    assert log_level(name) == expected


def test_log_level_custom_default() -> None:
    assert log_level("nonsense", default="ERROR") == "ERROR"
