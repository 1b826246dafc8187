"""Key normalizer 테스트."""

import pytest

from stdmeta.naming.keys import (
    KEY_SEPARATOR,
    build_composite_key,
    normalize_key,
    split_name_tokens,
    split_underscore_parts,
)


class TestNormalizeKey:
    def test_none_is_empty(self) -> None:
        assert normalize_key(None) == ""

    def test_blank_is_empty(self) -> None:
        assert normalize_key("   ") == ""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("  TB_USER ", "tb_user"),
            ("Main", "main"),
            ("사용자", "사용자"),
            (10, "10"),
        ],
    )
    def test_trim_and_lower(self, value: str | int, expected: str) -> None:
        result = normalize_key(value)
        assert result == expected
        assert result == result.strip().lower()

    def test_dash_kept_by_default(self) -> None:
        assert normalize_key("-") == "-"

    def test_dash_as_empty(self) -> None:
        assert normalize_key("-", empty_like_dash=True) == ""
        assert normalize_key(" - ", empty_like_dash=True) == ""

    def test_dash_inside_value_kept(self) -> None:
        assert normalize_key("A-B", empty_like_dash=True) == "a-b"


class TestBuildCompositeKey:
    def test_joined_with_separator(self) -> None:
        assert build_composite_key(["MAIN", "사용자"]) == f"main{KEY_SEPARATOR}사용자"

    def test_independent_of_case_and_whitespace(self) -> None:
        assert build_composite_key([" Main ", "TB_User"]) == build_composite_key(
            ["MAIN", "tb_user"]
        )

    @pytest.mark.parametrize("empty", [None, "", "   "])
    def test_any_empty_part_yields_empty(self, empty: str | None) -> None:
        assert build_composite_key(["MAIN", empty]) == ""

    def test_dash_part_yields_empty_with_flag(self) -> None:
        assert build_composite_key(["MAIN", "-"], empty_like_dash=True) == ""
        assert build_composite_key(["MAIN", "-"]) == "main|-"

    def test_no_parts(self) -> None:
        assert build_composite_key([]) == ""


class TestSplitParts:
    def test_split_underscore_parts_lowercases(self) -> None:
        assert split_underscore_parts("USER_ no__NM") == ["user", "no", "nm"]

    def test_split_name_tokens_keeps_case(self) -> None:
        assert split_name_tokens(" USER_No_ ") == ["USER", "No"]

    def test_empty_input(self) -> None:
        assert split_name_tokens(None) == []
        assert split_underscore_parts("") == []
