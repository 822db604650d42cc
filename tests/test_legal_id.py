from datetime import date

import pytest

from partyassets.pr3import.legal_id import add_century_digit, clean_legal_id, normalize_legal_id

TODAY = date(2024, 6, 1)


def test_clean_strips_everything_but_digits():
    assert clean_legal_id("650501-8585") == "6505018585"
    assert clean_legal_id(" 19 650501 8585 ") == "196505018585"
    assert clean_legal_id("abc") == ""


@pytest.mark.parametrize(
    "legal_id, expected",
    [
        ("6505018585", "196505018585"),
        ("0301021456", "200301021456"),
        ("2406011234", "202406011234"),
        ("2506011234", "192506011234"),
        ("196505018585", "196505018585"),
        ("200301021456", "200301021456"),
    ],
)
def test_add_century_digit(legal_id, expected):
    assert add_century_digit(legal_id, today=TODAY) == expected


@pytest.mark.parametrize("legal_id", ["", "   ", "not-a-legal-id", "650501-8585", "6505018585\n"])
def test_add_century_digit_rejects_blank_and_non_digits(legal_id):
    assert add_century_digit(legal_id, today=TODAY) is None


def test_add_century_digit_only_checks_the_prefix():
    # a 10-digit number for someone born in 2019 or 1920 already "has" a century
    assert add_century_digit("1912121212", today=TODAY) == "1912121212"
    assert add_century_digit("2012121212", today=TODAY) == "2012121212"


def test_normalize_is_idempotent():
    once = normalize_legal_id("650501-8585", today=TODAY)
    assert once == "196505018585"
    assert normalize_legal_id(once, today=TODAY) == once


def test_normalize_without_digits_has_no_result():
    assert normalize_legal_id("n/a", today=TODAY) is None


@pytest.mark.parametrize("legal_id", ["６５０５０１８５８５", "٦٥٠٥٠١٨٥٨٥", "65０5018585"])
def test_non_ascii_digits_are_not_digits(legal_id):
    assert add_century_digit(legal_id, today=TODAY) is None


def test_clean_drops_non_ascii_digits():
    assert clean_legal_id("６５０５０１-８５８５") == ""
    assert normalize_legal_id("６５０５０１-８５８５", today=TODAY) is None
