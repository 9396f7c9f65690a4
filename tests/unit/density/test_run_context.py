import pytest
from genedensity.density.run_context import RunContext, COUNTING, PERSISTED


def test_stage_transitions():
    context = RunContext("tag")
    context.set_stage(COUNTING, "1")

    assert context.stage == COUNTING
    assert context.current_chromosome == "1"

    context.set_stage(PERSISTED)
    assert context.current_chromosome == "1"


def test_unknown_stage_raises():
    with pytest.raises(ValueError):
        RunContext("tag").set_stage("exploded")


def test_totals_are_per_chromosome():
    context = RunContext("tag")
    context.start_chromosome("1")
    context.add_total("1", "X_KNOWN")
    context.add_total("1", "X_KNOWN")
    context.add_total("2", "Y_KNOWN")

    assert context.chromosome_totals("1") == {"X_KNOWN": 2}
    assert context.chromosome_totals("2") == {"Y_KNOWN": 1}
    assert context.chromosome_totals("3") == {}


def test_no_limit_accepts_everything():
    context = RunContext("tag")

    assert not context.has_limit
    assert context.accepts(None)
    assert context.missing_ids == []


def test_limit_tracks_found_ids():
    context = RunContext("tag", limit_ids=["B", "A", "C"])

    assert context.accepts("A")
    assert not context.accepts("Z")
    assert context.missing_ids == ["B", "C"]


def test_stats_and_failures():
    context = RunContext("tag", dry_run=True)
    context.record_new_pair("lincRNA_NOVEL")
    context.record_window_failure("1", 1, 10, RuntimeError("boom"))
    context.processed_chromosomes.append("2")

    assert context.succeeded
    context.record_chromosome_failure("1", RuntimeError("disk full"))
    assert not context.succeeded

    assert context.stats() == {
        "stage": "planned",
        "dry_run": True,
        "chromosomes": ["2"],
        "new_pairs": ["lincRNA_NOVEL"],
        "failed_windows": 1,
        "failed_chromosomes": {"1": "disk full"},
        "missing_ids": [],
    }
