import json
from datetime import datetime
from pathlib import Path
from sqlalchemy.orm import Session
from genedensity.utils.logger import Logger
from genedensity.db.models import DensityRun
from genedensity.density.aggregator import ChromosomeAggregator
from genedensity.density.bin_planner import (
    DEFAULT_THRESHOLD,
    DEFAULT_TARGET_BINS,
    plan_block_sizes,
)
from genedensity.density.classifier import GeneTypeClassifier
from genedensity.density.counter import BinnedCounter
from genedensity.density.feature_store import SQLFeatureStore
from genedensity.density.run_context import (
    RunContext,
    PLANNED,
    CLASSIFYING,
    AGGREGATING,
    PERSISTED,
)

DEFAULT_ANALYSIS_TAG = "genedensity"


def read_limit_file(path) -> set:
    """Gene stable ids from a file, first whitespace-separated token per line."""
    limit_path = Path(path)
    if not limit_path.exists():
        raise FileNotFoundError(f"Limit file not found: {path}")
    ids = set()
    with limit_path.open() as f:
        for line in f:
            tokens = line.split()
            if tokens:
                ids.add(tokens[0])
    return ids


class DensityManager:
    def __init__(
        self,
        session: Session = None,
        store=None,
        classifier: GeneTypeClassifier = None,
        analysis_tag: str = DEFAULT_ANALYSIS_TAG,
        threshold: int = DEFAULT_THRESHOLD,
        target_bins: int = DEFAULT_TARGET_BINS,
        logger=None,
    ):
        self.session = session
        self.logger = logger or Logger()
        self.store = store or SQLFeatureStore(session, self.logger)
        self.classifier = classifier or GeneTypeClassifier.from_json()
        self.aggregator = ChromosomeAggregator(self.classifier)
        self.analysis_tag = analysis_tag
        self.threshold = threshold
        self.target_bins = target_bins

    # ----------------------------------
    # PRUNE
    # ----------------------------------
    def prune(self) -> bool:
        """
        Deletes the output of previous runs tagged with `analysis_tag`:
        analyses, density types, density features and the summary attribs
        of the configured codes.
        """
        self.logger.log("running in prune mode", "INFO")
        codes = [bucket.code for bucket in self.classifier.summary_buckets]
        try:
            deleted = self.store.prune_by_tag(self.analysis_tag, codes)
        except Exception as e:
            msg = f"❌ Prune failed, previous entries have NOT been deleted: {e}"  # noqa E501
            self.logger.log(msg, "ERROR")
            return False

        for table, count in deleted.items():
            self.logger.log(f"🧹 Pruned {count} rows from {table}", "INFO")
        msg = f"✅ Prune successful: previous entries of '{self.analysis_tag}' deleted"  # noqa E501
        self.logger.log(msg, "INFO")
        return True

    # ----------------------------------
    # BIOTYPE / STATUS CHECK
    # ----------------------------------
    def check_pairs(self) -> dict:
        """Logs every (biotype, status) pair of the store and flags new ones."""
        pairs = self.classifier.check_pairs(self.store.list_category_pairs())

        self.logger.log("Checking for new biotype/status pairs...", "INFO")
        self.logger.log_table(
            [(name, "YES" if new else "no") for name, new in pairs.items()],
            header=("BIOTYPE/STATUS", "NEW"),
        )
        if any(pairs.values()):
            msg = "⚠️ There are new biotype/status pairs! Add them to the gene types table to count them."  # noqa E501
            self.logger.log(msg, "WARNING")
        return pairs

    # ----------------------------------
    # PLAN
    # ----------------------------------
    def plan(self, chromosomes) -> dict:
        block_plan = plan_block_sizes(
            chromosomes, threshold=self.threshold, target_bins=self.target_bins
        )
        for block_size, group in block_plan.items():
            names = ", ".join(c.name for c in group)
            msg = f"Available chromosomes using block size of {block_size}: {names}"  # noqa E501
            self.logger.log(msg, "INFO")
        return block_plan

    # ----------------------------------
    # RUN
    # ----------------------------------
    def start_process(
        self,
        chromosomes: list = None,
        dry_run: bool = False,
        limit_ids=None,
    ) -> RunContext:
        """
        Computes gene densities and per-chromosome totals.

        Parameters:
        - chromosomes (list[str], optional): subset of chromosome names.
        - dry_run (bool): count and report without writing anything.
        - limit_ids (iterable[str], optional): only count these stable ids.

        Notes:
        - A failing window fetch skips that window only.
        - A failing write marks the chromosome as failed and the run moves on
          to the next chromosome.
        """
        if isinstance(chromosomes, str):
            chromosomes = [chromosomes]

        context = RunContext(self.analysis_tag, dry_run=dry_run, limit_ids=limit_ids)
        context.set_stage(PLANNED)
        if dry_run:
            self.logger.log("🧪 Dry run: nothing will be written", "INFO")

        slices = self.store.list_chromosomes(chromosomes)
        if not slices:
            self.logger.log("⚠️ No matching chromosomes found.", "WARNING")
            return context

        block_plan = self.plan(slices)
        self.check_pairs()

        if not dry_run:
            try:
                self.store.register_density_types(
                    self.classifier.density_types,
                    list(block_plan.keys()),
                    self.analysis_tag,
                )
            except Exception as e:
                msg = f"❌ Could not create density types: {e}"
                self.logger.log(msg, "ERROR")
                for chrom in slices:
                    context.record_chromosome_failure(chrom.name, e)
                return context

        run = self._open_run(context, chromosomes)
        counter = BinnedCounter(self.store, self.classifier, context, self.logger)

        for block_size, group in block_plan.items():
            self.logger.log(
                f"🔁 Looping over chromosomes with block size {block_size}...",
                "INFO",
            )
            for chromosome in group:
                self.process_chromosome(chromosome, block_size, counter, context)

        self._report_new_pairs(context)
        self._report_limit_ids(context)
        self._close_run(run, context)

        if context.succeeded:
            self.logger.log("✅ Density run completed", "INFO")
        else:
            failed = ", ".join(sorted(context.failed_chromosomes))
            self.logger.log(f"❌ Density run finished with failures on: {failed}", "ERROR")  # noqa E501
        return context

    def process_chromosome(self, chromosome, block_size, counter, context) -> bool:
        self.logger.log(
            f"Chromosome {chromosome.name} with block size {block_size}...",
            "INFO",
        )
        context.set_stage(CLASSIFYING, chromosome.name)
        context.start_chromosome(chromosome.name)

        records = counter.count_chromosome(chromosome, block_size)

        context.set_stage(AGGREGATING, chromosome.name)
        totals = context.chromosome_totals(chromosome.name)
        entries = self.aggregator.summarize(totals)

        if not context.dry_run:
            written = 0
            try:
                written = self.store.store_density_records(
                    chromosome, block_size, records
                )
                self.store.store_chromosome_summary(chromosome, entries)
            except Exception as e:
                msg = f"❌ Could not store results for chromosome {chromosome.name}: {e}"  # noqa E501
                self.logger.log(msg, "ERROR")
                if written:
                    msg = f"⚠️ {written} density features of chromosome {chromosome.name} were stored without a summary, prune before re-running"  # noqa E501
                    self.logger.log(msg, "WARNING")
                context.record_chromosome_failure(chromosome.name, e)
                return False

        context.set_stage(PERSISTED, chromosome.name)
        context.processed_chromosomes.append(chromosome.name)

        self.logger.log(f"Totals for chr {chromosome.name}:", "INFO")
        self.logger.log_table(
            self.aggregator.final_totals(totals).items(),
            header=("TYPE", "COUNT"),
            level="DEBUG",
        )
        return True

    # ----------------------------------
    # END OF RUN REPORTS
    # ----------------------------------
    def _report_new_pairs(self, context):
        if context.new_pairs:
            pairs = ", ".join(sorted(context.new_pairs))
            msg = f"⚠️ Genes with new biotype/status pairs were not counted: {pairs}"  # noqa E501
            self.logger.log(msg, "WARNING")

    def _report_limit_ids(self, context):
        if not context.has_limit:
            return
        missing = context.missing_ids
        msg = (
            f"Of the {len(context.limit_ids)} genes in the limit set, "
            f"the following were missing: {' '.join(missing)}"
        )
        self.logger.log(msg, "WARNING" if missing else "INFO")

    # ----------------------------------
    # RUN AUDIT
    # ----------------------------------
    def _open_run(self, context, chromosomes):
        if context.dry_run or self.session is None:
            return None
        run = DensityRun(
            analysis_tag=self.analysis_tag,
            status="running",
            dry_run=False,
            chromosomes=",".join(chromosomes) if chromosomes else None,
        )
        self.session.add(run)
        self.session.commit()
        self.logger.log(f"📦 Created DensityRun ID={run.id}", "DEBUG")
        return run

    def _close_run(self, run, context):
        if run is None:
            return
        run.status = "completed" if context.succeeded else "failed"
        run.run_end = datetime.now()
        run.stats = json.dumps(context.stats())
        self.session.commit()
