"""Tests for ranking and the query engine."""

import logging

import pytest

from dexsearch.models import Entity, Pokemon
from dexsearch.query.engine import QueryEngine, normalize, rank
from dexsearch.query.models import Match, MatchScore


def make_entities(names):
    return [
        Entity(entity_id=i, name=name, fields=Pokemon(pokedex_number=i, generation=1))
        for i, name in enumerate(names, 1)
    ]


@pytest.fixture
def toy_entities():
    """Small dataset of starter names."""
    return make_entities(["Charizard", "Charmander", "Squirtle"])


def assert_sorted(results):
    for current, following in zip(results, results[1:]):
        a, b = current.score, following.score
        assert a.similarity > b.similarity or (
            a.similarity == b.similarity and a.distance <= b.distance
        )


def test_normalize_only_folds_case():
    """Test normalization keeps whitespace and punctuation."""
    assert normalize("Mr. Mime") == "mr. mime"
    assert normalize("  Type: NULL ") == "  type: null "


def test_exact_match(toy_entities):
    """Test an exact query ranks the entity first with a perfect score."""
    result = rank(toy_entities, "charizard", 1)[0]
    assert result.entity.name == "Charizard"
    assert result.score.distance == 0
    assert result.score.similarity == 1.0


def test_query_is_case_insensitive(toy_entities):
    """Test upper-case queries are folded before scoring."""
    result = rank(toy_entities, "CHARIZARD", 1)[0]
    assert result.entity.name == "Charizard"
    assert result.score.distance == 0


def test_close_match(toy_entities):
    """Test a typo still finds the intended entity."""
    result = rank(toy_entities, "charzad", 1)[0]
    assert result.entity.name == "Charizard"
    assert result.score.distance == 2
    assert result.score.similarity == pytest.approx(0.9555555555555555)


def test_loose_match(toy_entities):
    """Test a prefix query prefers the closer of two prefix matches."""
    results = rank(toy_entities, "char", 3)
    assert [r.entity.name for r in results] == ["Charizard", "Charmander", "Squirtle"]
    assert results[0].score.similarity == pytest.approx(0.888888888888889)
    assert results[0].score.distance == 5
    assert results[1].score.similarity == pytest.approx(0.88)
    assert results[1].score.distance == 6


def test_true_duplicates_keep_input_order():
    """Test entities with equal scores stay in input order."""
    entities = make_entities(["Pikachu", "pikachu", "PIKACHU"])
    results = rank(entities, "pika", 3)
    assert [r.entity.entity_id for r in results] == [1, 2, 3]

    reordered = list(reversed(entities))
    results = rank(reordered, "pika", 3)
    assert [r.entity.entity_id for r in results] == [3, 2, 1]


def test_distance_breaks_similarity_ties():
    """Test equal similarity is ordered by ascending distance."""
    # Both share 3 matches, no transpositions and the prefix "ab" with "abra".
    entities = make_entities(["Abax", "Abxa"])
    results = rank(entities, "abra", 2)

    assert results[0].score.similarity == results[1].score.similarity
    assert [r.entity.name for r in results] == ["Abxa", "Abax"]
    assert [r.score.distance for r in results] == [1, 2]


def test_sort_key_orders_equal_similarity_by_distance():
    """Test the sort key puts the smaller distance first on a tie."""
    better = MatchScore(distance=1, similarity=0.5)
    worse = MatchScore(distance=2, similarity=0.5)
    assert sorted([worse, better], key=MatchScore.sort_key) == [better, worse]


def test_limit_zero(toy_entities):
    """Test limit 0 returns an empty result."""
    assert rank(toy_entities, "charizard", 0) == []


def test_limit_larger_than_dataset(toy_entities):
    """Test a large limit returns every entity, sorted."""
    results = rank(toy_entities, "squirt", 10)
    assert len(results) == 3
    assert results[0].entity.name == "Squirtle"
    assert_sorted(results)


@pytest.mark.parametrize("limit", [0, 1, 2, 3, 5])
def test_result_length(toy_entities, limit):
    """Test result length is min(len(entities), limit)."""
    assert len(rank(toy_entities, "x", limit)) == min(len(toy_entities), limit)


@pytest.mark.parametrize("query", ["x", "char", "mander", "squirtel", "zzz", "Charizard "])
def test_results_are_sorted(toy_entities, query):
    """Test every adjacent pair respects the ranking order."""
    assert_sorted(rank(toy_entities, query, 3))


def test_empty_entities():
    """Test ranking nothing returns an empty list, not an error."""
    assert rank([], "anything", 5) == []


def test_empty_query(toy_entities):
    """Test an empty query scores every name by its length."""
    results = rank(toy_entities, "", 3)
    assert len(results) == 3
    for result in results:
        assert result.score.similarity == 0.0
        assert result.score.distance == len(result.entity.name)
    # All similarities tie, so shorter names come first
    assert [r.entity.name for r in results] == ["Squirtle", "Charizard", "Charmander"]


def test_negative_limit_rejected(toy_entities):
    """Test a negative limit is a caller error."""
    with pytest.raises(ValueError):
        rank(toy_entities, "char", -1)


def test_rank_returns_match_objects(toy_entities):
    """Test results carry the original entity and its score."""
    result = rank(toy_entities, "squirtle", 1)[0]
    assert isinstance(result, Match)
    assert result.entity is toy_entities[2]


def test_rank_does_not_mutate_input(toy_entities):
    """Test the input sequence keeps its order."""
    before = list(toy_entities)
    rank(toy_entities, "squirtle", 3)
    assert toy_entities == before


def test_engine_search(toy_entities):
    """Test QueryEngine.search delegates to rank."""
    engine = QueryEngine(toy_entities)
    results = engine.search("charzad", limit=2)
    assert [r.entity.name for r in results] == ["Charizard", "Charmander"]


def test_engine_search_logs_candidates(toy_entities, caplog):
    """Test each candidate is logged with its scores."""
    engine = QueryEngine(toy_entities)
    with caplog.at_level(logging.INFO, logger="dexsearch.query.engine"):
        engine.search("charizard", limit=2)

    messages = [r.getMessage() for r in caplog.records]
    assert messages[0] == "match #1, Charizard (1), similarity: 1.0, distance: 0"
    assert messages[1].startswith("match #2, Charmander (2)")


def test_engine_best_match(toy_entities):
    """Test best_match returns the top match."""
    engine = QueryEngine(toy_entities)
    assert engine.best_match("squirtle").entity.name == "Squirtle"


def test_engine_best_match_empty_dataset():
    """Test best_match returns None without records."""
    assert QueryEngine([]).best_match("anything") is None
