import pytest
from genedensity.density.density_manager import DensityManager
from genedensity.report.report_manager import ReportManager
from genedensity.report.reports.base_report import ReportBase


@pytest.fixture
def computed_session(seeded_session, simple_classifier, mock_logger):
    DensityManager(
        session=seeded_session,
        classifier=simple_classifier,
        threshold=500_000,
        target_bins=100,
        logger=mock_logger,
    ).start_process()
    return seeded_session


@pytest.fixture
def manager(computed_session, mock_logger):
    return ReportManager(session=computed_session, logger=mock_logger)


def test_list_reports(mock_logger):
    reports = ReportManager(session=None, logger=mock_logger).list_reports()

    assert [r["name"] for r in reports] == [
        "chromosome_summary",
        "density_features",
        "gene_types",
    ]
    assert all(r["description"] for r in reports)


def test_unknown_report_raises(mock_logger):
    with pytest.raises(ValueError, match="Report not found"):
        ReportManager(session=None, logger=mock_logger).run_report("nope")


def test_explain_by_name_or_module(mock_logger):
    manager = ReportManager(session=None, logger=mock_logger)

    assert "Pivot" in manager.explain("chromosome_summary")
    assert manager.explain("report_chromosome_summary") == manager.explain(
        "chromosome_summary"
    )


def test_density_features_report(manager):
    df = manager.run_report("density_features")

    assert list(df.columns) == [
        "chromosome", "block_size", "start", "end", "logic_name", "value"
    ]
    assert len(df) == 400
    hit = df[(df.logic_name == "xDensity") & (df.value > 0)]
    assert hit[["chromosome", "start", "end"]].values.tolist() == [
        ["1", 10_001, 20_000],
        ["2", 1, 4_000],
    ]


def test_density_features_report_filters(manager):
    df = manager.run_report(
        "density_features", chromosomes="2", logic_names=["yDensity"]
    )

    assert len(df) == 100
    assert set(df.chromosome) == {"2"}
    assert df.block_size.unique().tolist() == [4_000]


def test_density_features_report_other_tag_is_empty(manager):
    df = manager.run_report("density_features", analysis_tag="other")
    assert df.empty


def test_chromosome_summary_report(manager):
    df = manager.run_report("chromosome_summary")

    assert list(df.columns) == ["chromosome", "XCount", "XYCount", "YCount"]
    rows = df.set_index("chromosome").to_dict("index")
    assert rows["1"] == {"XCount": 1, "XYCount": 2, "YCount": 1}
    assert rows["2"] == {"XCount": 1, "XYCount": 1, "YCount": 0}


def test_chromosome_summary_report_empty(db_session, mock_logger):
    df = ReportManager(db_session, mock_logger).run_report("chromosome_summary")
    assert df.empty


def test_gene_types_report(seeded_session, simple_classifier, mock_logger):
    df = ReportManager(seeded_session, mock_logger).run_report(
        "gene_types", classifier=simple_classifier
    )

    rows = df.set_index("biotype_status").to_dict("index")
    assert rows["X_KNOWN"]["genes"] == 3
    assert rows["Z_KNOWN"]["logic_name"] == "yDensity"
    assert rows["unknown_biotype_NOVEL"]["new"]
    assert not rows["X_KNOWN"]["new"]


def test_resolve_input_list(tmp_path):
    report = ReportBase()
    path = tmp_path / "chroms.txt"
    path.write_text("1\n\nX\n")

    assert report.resolve_input_list(None) == []
    assert report.resolve_input_list(["1", 2]) == ["1", "2"]
    assert report.resolve_input_list("1, 2,X") == ["1", "2", "X"]
    assert report.resolve_input_list(str(path)) == ["1", "X"]
    with pytest.raises(ValueError):
        report.resolve_input_list(42, "chromosomes")
