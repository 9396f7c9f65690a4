import pytest
from click.testing import CliRunner
from genedensity.utils.main_cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def db_uri(tmp_path, monkeypatch, runner, example_seed):
    monkeypatch.chdir(tmp_path)
    uri = f"sqlite:///{tmp_path / 'vega.sqlite'}"
    result = runner.invoke(
        main,
        ["project", "create", "--db-uri", uri, "--seed-file", str(example_seed)],
    )
    assert result.exit_code == 0, result.output
    return uri


def test_run_reports_processed_chromosomes(runner, db_uri):
    result = runner.invoke(main, ["run", "--db-uri", db_uri])

    assert result.exit_code == 0, result.output
    assert "Processed 3 chromosome(s), 1 new biotype/status pair(s)" in result.output  # noqa E501


def test_run_subset_dry_run(runner, db_uri):
    result = runner.invoke(
        main, ["run", "--db-uri", db_uri, "--chr", "1,2", "--dry-run"]
    )

    assert result.exit_code == 0, result.output
    assert "Processed 2 chromosome(s)" in result.output


def test_prune_exits_zero(runner, db_uri):
    runner.invoke(main, ["run", "--db-uri", db_uri])
    result = runner.invoke(main, ["run", "--db-uri", db_uri, "--prune"])

    assert result.exit_code == 0, result.output


def test_run_without_database_is_usage_error(runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(main, ["run"])

    assert result.exit_code == 2
    assert "Missing required --db-uri" in result.output


def test_check_types(runner, db_uri):
    result = runner.invoke(main, ["check-types", "--db-uri", db_uri])

    assert result.exit_code == 0, result.output
    rows = [line.split() for line in result.output.splitlines()]
    lines = {row[0]: row[1] for row in rows if len(row) == 2}
    assert lines["lincRNA_NOVEL"] == "YES"
    assert lines["protein_coding_KNOWN"] == "no"


def test_report_to_csv(runner, db_uri, tmp_path):
    runner.invoke(main, ["run", "--db-uri", db_uri])
    out = tmp_path / "summary.csv"

    result = runner.invoke(
        main,
        ["report", "chromosome_summary", "--db-uri", db_uri, "--output", str(out)],  # noqa E501
    )

    assert result.exit_code == 0, result.output
    header = out.read_text().splitlines()[0]
    assert header.startswith("chromosome,")
    assert "KnownPCCount" in header


def test_list_reports(runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(main, ["list-reports"])

    assert result.exit_code == 0
    assert "density_features" in result.output


def test_report_explain_needs_no_database(runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(main, ["report", "density_features", "--explain"])

    assert result.exit_code == 0, result.output
    assert "Density Features Report" in result.output
    assert "logic_names" in result.output


def test_create_project_from_plain_path(runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(main, ["project", "create", "--db-uri", "vega.sqlite"])  # noqa E501

    assert result.exit_code == 0, result.output
    assert (tmp_path / "vega.sqlite").exists()
