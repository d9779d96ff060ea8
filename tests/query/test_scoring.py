"""Tests for similarity scoring."""

import pytest

from dexsearch.query.models import MatchScore
from dexsearch.query.scoring import (
    MAX_PREFIX_LENGTH,
    PREFIX_SCALE,
    common_prefix_length,
    jaro_winkler,
    score,
)


def test_prefix_constants_are_pinned():
    """Test the prefix bonus uses scale 0.1 over at most 4 characters."""
    assert PREFIX_SCALE == 0.1
    assert MAX_PREFIX_LENGTH == 4


@pytest.mark.parametrize("text", ["a", "charizard", "mr. mime", "type: null", "nidoran♀"])
def test_identical_strings_score_perfectly(text):
    """Test identical non-empty strings have distance 0 and similarity 1.0."""
    result = score(text, text)
    assert result.distance == 0
    assert result.similarity == 1.0


def test_close_match_fixture():
    """Test the prefix-boosted Jaro value for a typo."""
    result = score("charizard", "charzad")
    assert result.distance == 2
    assert result.similarity == pytest.approx(0.9555555555555555, abs=1e-12)


def test_loose_match_fixture():
    """Test a short prefix query against a longer name."""
    result = score("charizard", "char")
    assert result.distance == 5
    assert result.similarity == pytest.approx(0.888888888888889, abs=1e-12)


def test_prefix_bonus_applies_below_point_seven():
    """Test the bonus is applied even when the base Jaro score is low."""
    # Jaro("abcdxyz", "abqrstu") = (2/7 + 2/7 + 1) / 3
    jaro = (2 / 7 + 2 / 7 + 1) / 3
    assert jaro < 0.7
    expected = jaro + 2 * 0.1 * (1 - jaro)
    assert jaro_winkler("abcdxyz", "abqrstu") == pytest.approx(expected)


def test_transposition_penalty():
    """Test the classic MARTHA/MARHTA example."""
    assert jaro_winkler("martha", "marhta") == pytest.approx(0.9611111111111111)
    assert score("martha", "marhta").distance == 2


def test_disjoint_strings():
    """Test strings with no characters in common."""
    result = score("abc", "xyz")
    assert result.similarity == 0.0
    assert result.distance == 3


@pytest.mark.parametrize("text", ["charizard", "x", "mr. mime"])
def test_empty_query(text):
    """Test scoring against an empty string does not divide by zero."""
    result = score(text, "")
    assert result.distance == len(text)
    assert result.similarity == 0.0

    reverse = score("", text)
    assert reverse.distance == len(text)
    assert reverse.similarity == 0.0


def test_both_empty():
    """Test two empty strings score distance 0 and similarity 0.0."""
    assert score("", "") == MatchScore(distance=0, similarity=0.0)


@pytest.mark.parametrize("a,b", [
    ("charizard", "charzad"),
    ("squirtle", "char"),
    ("kitten", "sitting"),
    ("", "pikachu"),
    ("martha", "marhta"),
])
def test_score_is_symmetric(a, b):
    """Test both distance and similarity are symmetric."""
    assert score(a, b).distance == score(b, a).distance
    assert score(a, b).similarity == pytest.approx(score(b, a).similarity)


def test_kitten_sitting_distance():
    """Test the textbook edit distance example."""
    assert score("kitten", "sitting").distance == 3


def test_similarity_in_range():
    """Test similarity stays within [0, 1]."""
    for a, b in [("ab", "ba"), ("abcd", "abce"), ("a", "aaaaaaa"), ("mew", "mewtwo")]:
        assert 0.0 <= score(a, b).similarity <= 1.0


def test_common_prefix_length_is_capped():
    """Test prefix length counts at most four characters."""
    assert common_prefix_length("charizard", "charmander") == 4
    assert common_prefix_length("mew", "mewtwo") == 3
    assert common_prefix_length("abc", "xbc") == 0
    assert common_prefix_length("", "abc") == 0
