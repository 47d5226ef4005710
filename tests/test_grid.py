#!/usr/bin/env python3
"""
Tests for the single-layer alignment grid and its taxi modes.

Reference scores are the standard textbook examples for global, local,
fitting and overlap alignment.
"""

import random

import pytest
from dag_align import (
    BLOSUM62,
    EDIT_DISTANCE_GAPS,
    EDIT_DISTANCE_SCORING,
    FITTING,
    GLOBAL,
    LOCAL,
    OVERLAP,
    AlignmentGrid,
    GapPenalty,
    Graph,
    Layer,
    Move,
    Scoring,
    TopologyError,
    decode_path,
    Path,
)


def random_pairs(count, seed=7, alphabet="ACGT", max_length=12):
    rng = random.Random(seed)
    for _ in range(count):
        a = ''.join(rng.choice(alphabet) for _ in range(rng.randint(1, max_length)))
        b = ''.join(rng.choice(alphabet) for _ in range(rng.randint(1, max_length)))
        yield a, b


def ungapped(row, gap='-'):
    return row.replace(gap, '')


class TestGlobalGrid:
    """Global alignment (no taxis)."""

    @pytest.mark.parametrize("a,b,expected", [
        ("AC", "AC", 0),
        ("AC", "AG", -1),
        ("A", "T", -1),
        ("PLEASANTLY", "MEANLY", -5),
    ])
    def test_edit_scores(self, a, b, expected):
        grid = AlignmentGrid(a, b, EDIT_DISTANCE_SCORING, EDIT_DISTANCE_GAPS)
        assert grid.compute() == expected

    def test_blosum62(self):
        """PLEASANTLY against MEANLY with indel -5 scores 8."""
        result = AlignmentGrid("PLEASANTLY", "MEANLY", BLOSUM62, GapPenalty(-5)).align()
        assert result.score == 8
        assert ungapped(result.aligned_a) == "PLEASANTLY"
        assert ungapped(result.aligned_b) == "MEANLY"

    def test_tie_prefers_horizontal_edge(self):
        """Substitution and two gaps tie; the horizontal edge is inserted first."""
        result = AlignmentGrid("A", "T", Scoring(1, -2), GapPenalty(-1)).align()
        assert result.score == -2
        assert result.aligned_a == "A-"
        assert result.aligned_b == "-T"
        assert result.moves == (Move.VERTICAL, Move.HORIZONTAL)

    def test_identical_sequences(self):
        result = AlignmentGrid("GATTACA", "GATTACA").align()
        assert result.score == 7
        assert result.aligned_a == result.aligned_b == "GATTACA"
        assert result.cigar == "7="

    def test_custom_gap_symbol(self):
        result = AlignmentGrid("ACGT", "AGT", Scoring(1, -1), GapPenalty(-1),
                               gap_symbol='.').align()
        assert result.aligned_a == "ACGT"
        assert result.aligned_b == "A.GT"
        assert result.gap == '.'

    def test_move_counts(self):
        """Every character of a is consumed by a diagonal or vertical move."""
        for a, b in random_pairs(25):
            grid = AlignmentGrid(a, b)
            result = grid.align()
            counts = {move: result.moves.count(move) for move in Move}
            assert counts[Move.DIAGONAL] + counts[Move.VERTICAL] == len(a)
            assert counts[Move.DIAGONAL] + counts[Move.HORIZONTAL] == len(b)
            assert len(result.moves) == len(grid.path) - 1
            assert len(result.aligned_a) == len(result.aligned_b) == len(result)

    def test_score_matches_columns(self):
        """Recomputing the score column by column gives the path weight."""
        scoring, gaps = Scoring(2, -1), GapPenalty(-2)
        for a, b in random_pairs(25, seed=11):
            result = AlignmentGrid(a, b, scoring, gaps).align()
            total = 0
            for x, y in zip(result.aligned_a, result.aligned_b):
                total += gaps.open if '-' in (x, y) else scoring(x, y)
            assert total == result.score

    def test_deterministic(self):
        a, b = "GGACTTACG", "GACTAGCG"
        first = AlignmentGrid(a, b).align()
        second = AlignmentGrid(a, b).align()
        assert first == second

    def test_align_twice(self):
        """align() reuses computed scores."""
        grid = AlignmentGrid("ACGT", "ACT")
        assert grid.align() == grid.align()
        assert grid.computed

    def test_grid_shape(self):
        grid = AlignmentGrid("ACGT", "ACT")
        assert grid.coords.rows == 5
        assert grid.coords.cols == 4
        assert len(grid.cells) == 20
        assert grid.source == 0
        assert grid.sink == 19


class TestGenericEngineOnGrid:
    """The grid's fast scan agrees with the generic level-by-level engine."""

    def test_same_sink_score(self):
        for a, b in random_pairs(20, seed=3):
            fast = AlignmentGrid(a, b, Scoring(1, -1), GapPenalty(-2)).compute()
            graph = AlignmentGrid(a, b, Scoring(1, -1), GapPenalty(-2)).graph
            assert graph.find_path(validate=True).weight == fast

    def test_grid_graph_is_valid(self):
        AlignmentGrid("ACGT", "AGT").graph.validate()


class TestLocalGrid:
    """Local alignment: free restarts and free exits anywhere."""

    def test_reference(self):
        result = AlignmentGrid("AAATTTGGG", "CCTTTCC", Scoring(1, -1), GapPenalty(-1),
                               taxi=LOCAL).align()
        assert result.score == 3
        assert result.aligned_a == result.aligned_b == "TTT"
        assert (result.a_start, result.a_end) == (3, 6)
        assert (result.b_start, result.b_end) == (2, 5)

    def test_best_substring_pair(self):
        """The local score is the best global score over all pairs of substrings."""
        scoring, gaps = Scoring(2, -1), GapPenalty(-2)
        for a, b in random_pairs(8, seed=21, max_length=6):
            best = 0
            for i in range(len(a)):
                for j in range(i + 1, len(a) + 1):
                    for k in range(len(b)):
                        for m in range(k + 1, len(b) + 1):
                            best = max(best, AlignmentGrid(a[i:j], b[k:m], scoring, gaps).compute())
            assert AlignmentGrid(a, b, scoring, gaps, taxi=LOCAL).compute() == best

    def test_blosum62(self):
        """The aligned region is a substring of each input."""
        a, b = "MEANLYPRTEINSTRING", "PLEASANTLYEINSTEIN"
        result = AlignmentGrid(a, b, BLOSUM62, GapPenalty(-5), taxi=LOCAL).align()
        assert result.score > AlignmentGrid(a, b, BLOSUM62, GapPenalty(-5)).compute()
        assert ungapped(result.aligned_a) == a[result.a_start:result.a_end]
        assert ungapped(result.aligned_b) == b[result.b_start:result.b_end]

    def test_unrelated_sequences(self):
        """Nothing scores above zero: an empty alignment with score 0."""
        result = AlignmentGrid("AAAA", "TTTT", Scoring(1, -1), GapPenalty(-1),
                               taxi=LOCAL).align()
        assert result.score == 0
        assert result.aligned_a == result.aligned_b == ""
        assert result.moves == ()

    def test_local_never_below_global(self):
        for a, b in random_pairs(30, seed=5):
            local = AlignmentGrid(a, b, taxi=LOCAL).compute()
            global_ = AlignmentGrid(a, b, taxi=GLOBAL).compute()
            assert local >= global_
            assert local >= 0

    def test_region_reconstructs_inputs(self):
        for a, b in random_pairs(30, seed=9):
            result = AlignmentGrid(a, b, Scoring(2, -1), GapPenalty(-1), taxi=LOCAL).align()
            assert ungapped(result.aligned_a) == a[result.a_start:result.a_end]
            assert ungapped(result.aligned_b) == b[result.b_start:result.b_end]

    def test_path_enters_through_taxi(self):
        grid = AlignmentGrid("AAATTTGGG", "CCTTTCC", Scoring(1, -1), GapPenalty(-1),
                             taxi=LOCAL)
        grid.align()
        assert grid.path.ids[0] == grid.source
        assert grid.path.ids[-1] == grid.sink
        assert grid.cells[grid.path.ids[1]].taxi
        assert grid.cells[grid.sink].taxi


class TestFittingAndOverlap:
    """Free ends on one axis only."""

    def test_fitting_reference(self):
        a, b = "GTAGGCTTAAGGTTA", "TAGATA"
        result = AlignmentGrid(a, b, Scoring(1, -1), GapPenalty(-1), taxi=FITTING).align()
        assert result.score == 2
        assert ungapped(result.aligned_b) == b
        assert (result.b_start, result.b_end) == (0, len(b))
        assert ungapped(result.aligned_a) == a[result.a_start:result.a_end]

    def test_fitting_exact_substring(self):
        result = AlignmentGrid("CCCGATTACACCC", "GATTACA", taxi=FITTING).align()
        assert result.score == 7
        assert (result.a_start, result.a_end) == (3, 10)

    def test_overlap_reference(self):
        a, b = "PAWHEAE", "HEAGAWGHEE"
        result = AlignmentGrid(a, b, Scoring(1, -2), GapPenalty(-2), taxi=OVERLAP).align()
        assert result.score == 1
        assert result.a_end == len(a)
        assert result.b_start == 0
        assert ungapped(result.aligned_a) == a[result.a_start:]
        assert ungapped(result.aligned_b) == b[:result.b_end]

    def test_overlap_suffix_prefix(self):
        result = AlignmentGrid("TTTTACGT", "ACGTGGGG", taxi=OVERLAP).align()
        assert result.score == 4
        assert result.aligned_a == result.aligned_b == "ACGT"

    @pytest.mark.parametrize("a,b,expected", [
        ("CGCC", "GG", -1),    # "CG" against "GG"
        ("AAAA", "TT", -4),
    ])
    def test_fitting_negative_exits(self, a, b, expected):
        """With every exit below zero the best one still wins."""
        assert AlignmentGrid(a, b, Scoring(1, -2), GapPenalty(-2), taxi=FITTING).compute() == expected

    def test_overlap_negative_exits(self):
        result = AlignmentGrid("TTGA", "GCCC", Scoring(1, -2), GapPenalty(-2),
                               taxi=OVERLAP).align()
        assert result.score == -1
        assert result.a_end == 4
        assert result.b_start == 0

    def test_fitting_best_substring(self):
        """Fitting scores the best global alignment of b against a substring of a."""
        scoring, gaps = Scoring(1, -2), GapPenalty(-2)
        for a, b in random_pairs(15, seed=13, max_length=6):
            best = max(AlignmentGrid(a[i:j], b, scoring, gaps).compute()
                       for i in range(len(a)) for j in range(i + 1, len(a) + 1))
            assert AlignmentGrid(a, b, scoring, gaps, taxi=FITTING).compute() == best, (a, b)

    def test_overlap_best_suffix_prefix(self):
        """Overlap scores the best global alignment of a suffix of a and a prefix of b."""
        scoring, gaps = Scoring(1, -2), GapPenalty(-2)
        for a, b in random_pairs(15, seed=17, max_length=6):
            best = max(AlignmentGrid(a[i:], b[:k], scoring, gaps).compute()
                       for i in range(len(a)) for k in range(1, len(b) + 1))
            assert AlignmentGrid(a, b, scoring, gaps, taxi=OVERLAP).compute() == best, (a, b)

    @pytest.mark.parametrize("mode", ["global", "local", "fitting", "overlap"])
    def test_mode_names(self, mode):
        """Mode names and presets build the same grid."""
        presets = {"global": GLOBAL, "local": LOCAL, "fitting": FITTING, "overlap": OVERLAP}
        by_name = AlignmentGrid("GTAGGCTTA", "TAGATA", taxi=mode).align()
        by_policy = AlignmentGrid("GTAGGCTTA", "TAGATA", taxi=presets[mode]).align()
        assert by_name == by_policy

    def test_free_start_needs_costly_gaps(self):
        """With free gaps there is nothing to skip; the taxi is not taken."""
        grid = AlignmentGrid("AAC", "C", Scoring(1, -1), GapPenalty(0), taxi=FITTING)
        result = grid.align()
        assert result.score == 1
        assert not any(grid.cells[i].taxi for i in grid.path.ids[:-1])


class TestDecoder:
    """Decoding paths into aligned rows."""

    def test_rejects_non_adjacent_step(self):
        grid = AlignmentGrid("ACGT", "ACGT")
        grid.compute()
        bad = Path((grid.coords.to_id(0, 0), grid.coords.to_id(2, 2)), 0)
        with pytest.raises(TopologyError, match="not an alignment move"):
            decode_path(bad, grid.cells, grid.coords, grid.a, grid.b)

    def test_layer_change_emits_nothing(self):
        grid = AlignmentGrid("A", "A", layered=True)
        coords = grid.coords
        path = Path((coords.to_id(0, 0), coords.to_id(0, 1, Layer.RIGHT),
                     coords.to_id(0, 1), coords.to_id(1, 1, Layer.DOWN),
                     coords.to_id(1, 1)), -4)
        result = decode_path(path, grid.cells, coords, grid.a, grid.b)
        assert result.aligned_a == "-A"
        assert result.aligned_b == "A-"
        assert result.moves == (Move.HORIZONTAL, Move.VERTICAL)

    def test_cigar(self):
        result = AlignmentGrid("ACGT", "AGT", Scoring(1, -1), GapPenalty(-1)).align()
        assert result.cigar == "1=1I2="

    def test_str(self):
        result = AlignmentGrid("AC", "AG", Scoring(1, -1), GapPenalty(-1)).align()
        assert str(result) == "0\nAC\nAG"


def test_graph_type():
    """The grid exposes its engine as a plain Graph."""
    assert isinstance(AlignmentGrid("A", "C").graph, Graph)
