import pytest
from genedensity.density.bin_planner import (
    plan_block_sizes,
    round_block_size,
    count_windows,
)
from genedensity.density.records import Chromosome


def _chroms(*lengths):
    return [Chromosome(name=str(i), length=n) for i, n in enumerate(lengths, 1)]


@pytest.mark.parametrize(
    "raw,expected",
    [
        (33_333.33, 33_300),
        (6_666.67, 6_670),
        (66.67, 67),
        (110.46, 110),
        (1_661_670.8, 1_660_000),
        (0.4, 1),
    ],
)
def test_round_block_size(raw, expected):
    assert round_block_size(raw) == expected


def test_count_windows_includes_partial_last_window():
    assert count_windows(1_000_000, 10_000) == 100
    assert count_windows(1_000_001, 10_000) == 101
    assert count_windows(5, 10) == 1


def test_plan_splits_groups_by_threshold():
    chroms = [
        Chromosome("1", 12_000_000),
        Chromosome("2", 7_500_000),
        Chromosome("MT", 16_569),
    ]
    plan = plan_block_sizes(chroms, threshold=5_000_000, target_bins=150)

    assert list(plan.keys()) == [50_000, 110]
    assert [c.name for c in plan[50_000]] == ["1", "2"]
    assert [c.name for c in plan[110]] == ["MT"]


def test_chromosome_at_threshold_goes_to_small_group():
    at, above = Chromosome("A", 1_000), Chromosome("B", 2_000)
    plan = plan_block_sizes([at, above], threshold=1_000, target_bins=10)

    assert plan == {200: [above], 100: [at]}


@pytest.mark.parametrize(
    "lengths",
    [
        (249_250_621, 8_123_457, 16_569, 1_000_000),
        (5_000_001, 4_999_999),
        (12_000_000, 7_500_000, 16_569),
    ],
)
def test_shortest_chromosome_of_each_group_gets_target_bins(lengths):
    target = 150
    chroms = _chroms(*lengths)
    plan = plan_block_sizes(chroms, threshold=5_000_000, target_bins=target)

    for block_size, group in plan.items():
        shortest = min(c.length for c in group)
        assert target - 1 <= count_windows(shortest, block_size) <= target + 1


def test_every_chromosome_planned_exactly_once():
    chroms = _chroms(249_250_621, 8_123_457, 16_569, 1_000_000, 5_000_000)
    plan = plan_block_sizes(chroms, threshold=5_000_000, target_bins=150)

    planned = [c.name for group in plan.values() for c in group]
    assert sorted(planned) == sorted(c.name for c in chroms)


def test_groups_with_same_block_size_are_merged():
    big, small = Chromosome("big", 150), Chromosome("small", 100)
    plan = plan_block_sizes([big, small], threshold=100, target_bins=150)

    assert plan == {1: [big, small]}


def test_empty_input_gives_empty_plan():
    assert plan_block_sizes([]) == {}


@pytest.mark.parametrize("threshold,bins", [(0, 150), (5_000_000, 0)])
def test_invalid_parameters_raise(threshold, bins):
    with pytest.raises(ValueError):
        plan_block_sizes(_chroms(1_000), threshold=threshold, target_bins=bins)


def test_zero_length_chromosome_raises():
    with pytest.raises(ValueError, match="no length"):
        plan_block_sizes([Chromosome("Y", 0)])
