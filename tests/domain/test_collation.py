"""Tests for offertory.domain.collation."""

import unicodedata

from offertory.domain.collation import korean_compare, sort_names


class TestKoreanCompare:
    """Tests for korean_compare."""

    def test_dictionary_order(self) -> None:
        """Should follow 가나다 order."""
        assert korean_compare("가나", "나가") < 0
        assert korean_compare("하늘", "바다") > 0
        assert korean_compare("선교비", "선교비") == 0

    def test_decomposed_hangul_matches_composed(self) -> None:
        """Should compare NFD input like its composed form."""
        composed = "김철수"
        decomposed = unicodedata.normalize("NFD", composed)

        assert korean_compare(decomposed, "박영희") < 0
        assert korean_compare(decomposed, "가") > 0

    def test_case_insensitive_with_tie_break(self) -> None:
        """Should ignore case first, then break the tie on the raw text."""
        assert korean_compare("apple", "Banana") < 0
        assert korean_compare("Apple", "apple") != 0


class TestSortNames:
    """Tests for sort_names."""

    def test_sorts_names(self) -> None:
        """Should sort a roster of names."""
        assert sort_names(["이민수", "김철수", "박영희", "강감찬"]) == ["강감찬", "김철수", "박영희", "이민수"]

    def test_latin_and_punctuation_by_code_point(self) -> None:
        """Should order non-Hangul text by code point with uppercase winning ties."""
        assert sort_names(["가", "b", "a", "A", "-x"]) == ["-x", "A", "a", "b", "가"]
