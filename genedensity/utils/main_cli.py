import click
from genedensity.genedensity import GeneDensity


def _connect(db_uri, config_file):
    gd = GeneDensity(db_uri=db_uri, config_file=config_file)
    if not gd.db:
        raise click.UsageError(
            "Missing required --db-uri (or [database] db_uri in .genedensity.toml)"  # noqa E501
        )
    return gd


# === Base group ===
@click.group()
def main():
    """GeneDensity CLI - gene densities and chromosome statistics."""
    pass


# === Subgroup: project ===
@main.group()
def project():
    """Project-level operations (database setup)."""
    pass


@project.command("create")
@click.option("--db-uri", required=True, help="Database URI")
@click.option("--overwrite", is_flag=True, help="Overwrite if exists")
@click.option(
    "--seed-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON with seq_regions and genes to load",
)
def create_new_project(db_uri, overwrite, seed_file):
    """Create a new density database (initializes tables)."""
    gd = GeneDensity(connect=False)
    gd.create_new_project(db_uri=db_uri, overwrite=overwrite, seed_file=seed_file)


# === Density run ===
@main.command("run")
@click.option("--db-uri", default=None, help="Database URI to connect")
@click.option("--config", "config_file", default=None, help="TOML config file")
@click.option(
    "--chromosomes",
    "--chr",
    "chromosomes",
    multiple=True,
    help="Only process these chromosomes (comma separated, repeatable)",
)
@click.option("-n", "--dry-run", is_flag=True, help="Don't write results to the database")  # noqa E501
@click.option("--prune", is_flag=True, help="Delete data from a previous run and exit")  # noqa E501
@click.option(
    "--limit-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Only count genes whose stable id is listed in this file",
)
@click.option("--threshold", type=click.INT, default=None, help="Chromosome size cutoff (bp)")  # noqa E501
@click.option("--bins", "target_bins", type=click.INT, default=None, help="Bins on the smallest chromosome")  # noqa E501
@click.option(
    "--gene-types",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON table of biotype/status buckets",
)
@click.option("-v", "--verbose", is_flag=True, help="Log per-bin counts")
@click.pass_context
def run(
    ctx,
    db_uri,
    config_file,
    chromosomes,
    dry_run,
    prune,
    limit_file,
    threshold,
    target_bins,
    gene_types,
    verbose,
):
    """Calculate gene densities and totals per chromosome."""
    gd = _connect(db_uri, config_file)
    result = gd.run(
        chromosomes=list(chromosomes),
        dry_run=dry_run,
        prune=prune,
        limit_file=limit_file,
        threshold=threshold,
        target_bins=target_bins,
        gene_types=gene_types,
        verbose=verbose,
    )

    if prune:
        ctx.exit(0 if result else 1)

    stats = result.stats()
    click.echo(
        f"Processed {len(stats['chromosomes'])} chromosome(s), "
        f"{len(stats['new_pairs'])} new biotype/status pair(s), "
        f"{stats['failed_windows']} skipped window(s)"
    )
    if not result.succeeded:
        failed = ", ".join(sorted(stats["failed_chromosomes"]))
        click.echo(f"Failed chromosomes: {failed}", err=True)
        ctx.exit(1)


@main.command("check-types")
@click.option("--db-uri", default=None, help="Database URI to connect")
@click.option("--config", "config_file", default=None, help="TOML config file")
@click.option(
    "--gene-types",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON table of biotype/status buckets",
)
def check_types(db_uri, config_file, gene_types):
    """List biotype/status pairs and flag the ones not in the table."""
    gd = _connect(db_uri, config_file)
    pairs = gd.check_types(gene_types=gene_types)
    for name, new in pairs.items():
        click.echo(f"{name:<50}{'YES' if new else 'no'}")


# === Reports ===
@main.command("report")
@click.argument("name")
@click.option("--db-uri", default=None, help="Database URI to connect")
@click.option("--config", "config_file", default=None, help="TOML config file")
@click.option("--chromosomes", default=None, help="Comma separated chromosome names")  # noqa E501
@click.option("--output", type=click.Path(dir_okay=False), default=None, help="Write CSV here")  # noqa E501
@click.option("--explain", is_flag=True, help="Describe the report and its parameters")  # noqa E501
def report(name, db_uri, config_file, chromosomes, output, explain):
    """Run a report (density_features, chromosome_summary, gene_types)."""
    if explain:
        click.echo(GeneDensity(connect=False).explain_report(name))
        return

    gd = _connect(db_uri, config_file)
    df = gd.report(name, chromosomes=chromosomes)
    if output:
        df.to_csv(output, index=False)
        click.echo(f"Report written to {output}")
    else:
        click.echo(df.to_string(index=False))


@main.command("list-reports")
def list_reports():
    """List the available reports."""
    gd = GeneDensity(connect=False)
    for n, r in enumerate(gd.list_reports(), start=1):
        click.echo(f"{n}. {r['name']}: {r['description']}")


"""
genedensity project create --db-uri sqlite:///vega.sqlite --seed-file vega.json
genedensity run --db-uri sqlite:///vega.sqlite --prune
genedensity run --db-uri sqlite:///vega.sqlite --chr 1,2 --dry-run
genedensity report chromosome_summary --db-uri sqlite:///vega.sqlite
"""
