"""
Unit tests for normalizer, similarity, keyword and grammar modules
"""
import pytest

from exam_grading.grader import (
    normalize_multiple_choice,
    normalize_text,
    levenshtein_distance,
    similarity,
    match_keywords,
    extract_keywords,
    grammar_score,
)


class TestNormalizer:
    """Test cases for answer normalization"""

    @pytest.mark.parametrize("mark, expected", [
        ("③", "3"),
        ("①", "1"),
        ("c", "3"),
        ("C", "3"),
        (" e ", "5"),
        ("3", "3"),
        ("Answer: 4", "4"),
        (2, "2"),
    ])
    def test_multiple_choice_marks(self, mark, expected):
        """Circled digits, letters and digits map to the choice number"""
        assert normalize_multiple_choice(mark) == expected

    def test_multiple_choice_fallback(self):
        """Unmappable text is returned trimmed"""
        assert normalize_multiple_choice("  xyz ") == "xyz"
        assert normalize_multiple_choice("ab") == "ab"

    def test_multiple_choice_empty(self):
        """Empty input normalizes to empty string"""
        assert normalize_multiple_choice(None) == ""
        assert normalize_multiple_choice("") == ""
        assert normalize_multiple_choice("   ") == ""

    def test_normalize_text(self):
        """Lower-cases, trims and strips punctuation"""
        assert normalize_text("Goes.") == "goes"
        assert normalize_text('  "Hello," she said!  ') == "hello she said"
        assert normalize_text("It's; fine: ok?") == "its fine ok"
        assert normalize_text(None) == ""


class TestSimilarity:
    """Test cases for edit distance and similarity"""

    @pytest.mark.parametrize("a, b, expected", [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("", "abc", 3),
        ("abc", "", 3),
        ("same", "same", 0),
        ("goas", "goes", 1),
    ])
    def test_levenshtein_distance(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    @pytest.mark.parametrize("a, b", [
        ("kitten", "sitting"),
        ("a", "abcdef"),
        ("안녕하세요", "안녕"),
        ("reading", "raeding"),
    ])
    def test_distance_is_symmetric(self, a, b):
        assert levenshtein_distance(a, b) == levenshtein_distance(b, a)

    def test_distance_long_strings(self):
        """Full strings are compared without truncation"""
        assert levenshtein_distance("a" * 1000, "b" * 1000) == 1000
        assert levenshtein_distance("a" * 1000, "a" * 999 + "b") == 1

    @pytest.mark.parametrize("text", ["", "a", "hello", "안녕하세요", "x" * 500, "①②③"])
    def test_identity(self, text):
        assert similarity(text, text) == 1.0

    def test_empty_strings(self):
        assert similarity("", "") == 1.0
        assert similarity("abc", "") == 0.0
        assert similarity("", "abc") == 0.0

    def test_similarity_values(self):
        assert similarity("goas", "goes") == pytest.approx(0.75)
        assert similarity("GOES", "goes") == 1.0
        assert similarity("abc", "xyz") == 0.0

    def test_similarity_bounds(self):
        for a, b in [("a", "bbbbbbbb"), ("short", "a much longer string"), ("İstanbul", "istanbul")]:
            assert 0.0 <= similarity(a, b) <= 1.0


class TestKeywords:
    """Test cases for keyword matching and extraction"""

    def test_match_keywords(self):
        result = match_keywords("The Cat sat on the mat", ["cat", "dog"])
        assert result.matched == ["cat"]
        assert result.missed == ["dog"]
        assert result.match_rate == 0.5

    def test_match_is_case_insensitive(self):
        result = match_keywords("photosynthesis uses LIGHT", ["Light", "Photo"])
        assert result.match_rate == 1.0

    def test_empty_keywords_vacuously_match(self):
        assert match_keywords("anything", []).match_rate == 1.0
        assert match_keywords("anything", None).match_rate == 1.0

    def test_match_empty_answer(self):
        result = match_keywords("", ["study"])
        assert result.match_rate == 0.0
        assert result.missed == ["study"]

    def test_extract_keywords(self):
        keywords = extract_keywords("I study hard because I want to get good grades.")
        assert keywords == ["study", "hard", "because", "want", "get"]

    def test_extract_keywords_strips_digits(self):
        assert extract_keywords("Area 51 is big") == ["area", "big"]

    def test_extract_keywords_hangul(self):
        assert extract_keywords("나는 학생입니다 hello") == ["학생입니다", "hello"]

    def test_extract_keywords_empty(self):
        assert extract_keywords("") == []
        assert extract_keywords(None) == []
        assert extract_keywords("I am a me") == []


class TestGrammar:
    """Test cases for the grammar heuristic"""

    def test_empty_answer(self):
        assert grammar_score("") == 0.0
        assert grammar_score("   ") == 0.0
        assert grammar_score(None) == 0.0

    def test_clean_sentence(self):
        assert grammar_score("Hello.") == 1.0
        assert grammar_score("I study hard because I want to get good grades.") == 1.0

    def test_lowercase_start(self):
        assert grammar_score("hello") == pytest.approx(0.9)

    def test_missing_terminator_only_for_long_answers(self):
        assert grammar_score("Short one") == 1.0
        assert grammar_score("Hello world again") == pytest.approx(0.9)

    def test_double_space(self):
        assert grammar_score("Hello  world.") == pytest.approx(0.95)

    def test_all_penalties(self):
        assert grammar_score("hello  world again") == pytest.approx(0.75)

    def test_caseless_first_character(self):
        """Digits and Hangul have no case and are not penalized"""
        assert grammar_score("123 apples") == 1.0
        assert grammar_score("학생") == 1.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
