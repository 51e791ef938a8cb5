"""Tests for pairwise covering-array construction."""

from __future__ import annotations

import itertools

import pytest

from caseforge.combinatorial import (
    CoverageStats,
    CoveringArrayReducer,
    cartesian_size,
    cartesian_tuples,
    pairwise_tuples,
)

BOOLS = (False, True)


def domains_of(*sizes):
    return [tuple(range(size)) for size in sizes]


class TestCoveringArrayReducer:
    """Tests for covering array generation."""

    def test_three_booleans(self, missing_pairs):
        domains = [BOOLS, BOOLS, BOOLS]
        tuples = CoveringArrayReducer(domains).generate()
        assert len(tuples) <= 8
        assert len(tuples) == 4
        assert missing_pairs(domains, tuples) == []

    @pytest.mark.parametrize(
        "sizes",
        [
            (2, 3, 4),
            (3, 3, 3, 3),
            (5, 1, 4),
            (1, 1, 1),
            (4, 4, 4, 4, 4),
            (2,) * 10,
            (6, 2, 5, 3),
            (2, 7),
        ],
    )
    def test_covers_all_pairs_within_exhaustive_size(self, sizes, missing_pairs):
        domains = domains_of(*sizes)
        tuples = CoveringArrayReducer(domains).generate()
        assert missing_pairs(domains, tuples) == []
        assert len(tuples) <= cartesian_size(domains)

    def test_never_smaller_than_lower_bound(self):
        domains = domains_of(4, 3, 5, 2)
        tuples = CoveringArrayReducer(domains).generate()
        assert len(tuples) >= 5 * 4

    def test_large_space_reduction(self, missing_pairs):
        domains = domains_of(5, 5, 5, 5)
        tuples = CoveringArrayReducer(domains).generate()
        # 5^4 = 625 exhaustive, pairwise needs at least 25
        assert 25 <= len(tuples) < 100
        assert missing_pairs(domains, tuples) == []

    def test_tuples_are_distinct(self):
        tuples = CoveringArrayReducer(domains_of(3, 4, 2, 3)).generate()
        assert len(set(tuples)) == len(tuples)

    def test_values_come_from_domains(self):
        domains = [("a", "b", "c"), (10, 20), (None, 1.5)]
        for t in CoveringArrayReducer(domains).generate():
            assert len(t) == 3
            for i, value in enumerate(t):
                assert value in domains[i]

    def test_two_parameters_equal_exhaustive(self):
        domains = [(1, 2, 3), ("x", "y")]
        assert CoveringArrayReducer(domains).generate() == list(cartesian_tuples(domains))

    def test_no_parameters(self):
        assert CoveringArrayReducer([]).generate() == [()]

    def test_single_parameter_is_whole_domain(self):
        assert CoveringArrayReducer([("x", "y", "z")]).generate() == [("x",), ("y",), ("z",)]

    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_empty_domain_yields_nothing(self, position):
        domains = [BOOLS, BOOLS, BOOLS]
        domains[position] = ()
        assert CoveringArrayReducer(domains).generate() == []

    def test_single_empty_domain(self):
        assert CoveringArrayReducer([()]).generate() == []

    def test_deterministic(self):
        domains = domains_of(3, 4, 2, 5, 3)
        first = CoveringArrayReducer(domains).generate()
        second = CoveringArrayReducer(domains).generate()
        assert first == second

    def test_unhashable_values(self, missing_pairs):
        domains = [
            ({"id": 1}, {"id": 2}),
            ([1], [2], [3]),
            BOOLS,
        ]
        tuples = CoveringArrayReducer(domains).generate()
        assert missing_pairs(domains, tuples) == []

    def test_duplicate_values(self, missing_pairs):
        domains = [(1, 1, 2), BOOLS, ("a", "b")]
        tuples = CoveringArrayReducer(domains).generate()
        assert missing_pairs(domains, tuples) == []

    def test_pairwise_tuples_iterator(self):
        domains = [BOOLS, BOOLS, BOOLS]
        assert list(pairwise_tuples(domains)) == CoveringArrayReducer(domains).generate()


class TestCoverageStats:
    def test_complete_coverage(self):
        reducer = CoveringArrayReducer([BOOLS, BOOLS, BOOLS])
        stats = reducer.coverage_stats(reducer.generate())
        assert stats.total_pairs == 12
        assert stats.covered_pairs == 12
        assert stats.coverage_pct == 100.0
        assert stats.complete
        assert stats.test_count == 4
        assert stats.exhaustive_count == 8

    def test_partial_coverage(self):
        reducer = CoveringArrayReducer([BOOLS, BOOLS, BOOLS])
        stats = reducer.coverage_stats([(False, False, False)])
        assert stats.covered_pairs == 3
        assert stats.coverage_pct == 25.0
        assert not stats.complete

    def test_exhaustive_set_is_complete(self):
        domains = domains_of(3, 2, 4)
        reducer = CoveringArrayReducer(domains)
        stats = reducer.coverage_stats(list(itertools.product(*domains)))
        assert stats.complete

    def test_no_pairs_counts_as_complete(self):
        reducer = CoveringArrayReducer([(1, 2)])
        stats = reducer.coverage_stats([(1,), (2,)])
        assert stats.total_pairs == 0
        assert stats.coverage_pct == 100.0

    def test_repr(self):
        stats = CoverageStats(
            total_pairs=12,
            covered_pairs=12,
            coverage_pct=100.0,
            test_count=4,
            exhaustive_count=8,
        )
        assert repr(stats) == (
            "CoverageStats(12/12 pairs covered (100.0%), 4 tests vs 8 exhaustive)"
        )
