"""
tests/test_name_converter.py

Decimal name encoding and the case-insensitive prefix predicate.
"""

from __future__ import annotations

import pytest

from pantheon.services.name_converter import name_to_decimal, starts_with_ignore_case


class TestNameToDecimal:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Njord", 110106111114100),
            ("Neptune", 110101112116117110101),
            ("Nemesis", 110101109101115105115),
            ("Nike", 110105107101),
            ("a", 97),
        ],
    )
    def test_concatenates_lowercase_code_points(self, name: str, expected: int) -> None:
        assert name_to_decimal(name) == expected

    def test_case_does_not_matter(self) -> None:
        assert name_to_decimal("NJORD") == name_to_decimal("njord")

    @pytest.mark.parametrize("name", [None, ""])
    def test_missing_name_encodes_to_zero(self, name: str | None) -> None:
        assert name_to_decimal(name) == 0

    def test_result_exceeds_64_bits(self) -> None:
        assert name_to_decimal("Nemesis") > 2**64

    def test_long_name_encodes_past_int_string_limit(self) -> None:
        name = "N" + "e" * 1500
        encoded = name_to_decimal(name)

        assert encoded % 1000 == 101
        assert 10**4502 <= encoded < 10**4503
        assert encoded == name_to_decimal(name.upper())

    def test_mixed_width_code_points(self) -> None:
        assert name_to_decimal("\u1f00a") == 7936 * 100 + 97

    def test_astral_character_is_one_code_point(self) -> None:
        assert name_to_decimal("a\U0001F600") == 97 * 10**6 + 128512


class TestStartsWithIgnoreCase:
    def test_matches_regardless_of_case(self) -> None:
        predicate = starts_with_ignore_case("n")
        assert predicate("Njord")
        assert predicate("nike")
        assert not predicate("Zeus")

    def test_upper_case_prefix(self) -> None:
        assert starts_with_ignore_case("NEP")("Neptune")

    @pytest.mark.parametrize("prefix", [None, ""])
    def test_missing_prefix_matches_nothing(self, prefix: str | None) -> None:
        predicate = starts_with_ignore_case(prefix)
        assert not predicate("Njord")
        assert not predicate("")

    def test_none_name_never_matches(self) -> None:
        assert not starts_with_ignore_case("n")(None)
