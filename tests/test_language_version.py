from __future__ import annotations

import sys

import pytest

from tracescope.language_version import LanguageVersion, try_parse_version


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("3.11", LanguageVersion(3, 11)),
        (" 3.8 ", LanguageVersion(3, 8)),
        ("3.12.4", LanguageVersion(3, 12)),
        ("2.7.18.0", LanguageVersion(2, 7)),
    ],
)
def test_try_parse_version_accepts_dotted_versions(text: str, expected: LanguageVersion) -> None:
    assert try_parse_version(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "3", "3.", "v3.11", "3.11.1.1.1", "Traceback (most recent call last):", "3.x"],
)
def test_try_parse_version_rejects_other_text(text: str) -> None:
    assert try_parse_version(text) is None


def test_feature_version_clamps_to_supported_range() -> None:
    current = (sys.version_info[0], sys.version_info[1])
    assert LanguageVersion(3, 0).feature_version() == (3, 7)
    assert LanguageVersion(3, 99).feature_version() == current
    assert LanguageVersion(3, 7).feature_version() == (3, 7)


def test_feature_version_is_none_for_python_2() -> None:
    assert LanguageVersion(2, 7).feature_version() is None


def test_version_renders_major_minor() -> None:
    assert str(LanguageVersion(3, 10)) == "3.10"
    assert LanguageVersion(3, 10).cst_version() == "3.10"
