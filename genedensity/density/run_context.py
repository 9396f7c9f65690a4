from collections import Counter

# Run stages, in order
PLANNED = "planned"
CLASSIFYING = "classifying"
COUNTING = "counting"
AGGREGATING = "aggregating"
PERSISTED = "persisted"

RUN_STAGES = (PLANNED, CLASSIFYING, COUNTING, AGGREGATING, PERSISTED)


class RunContext:
    """
    Mutable state of one density run.

    Holds the per-chromosome bucket totals, the unknown (biotype, status)
    pairs met while counting, the optional limit set of gene stable ids and
    every failure that did not abort the run.
    """

    def __init__(self, analysis_tag: str, dry_run: bool = False, limit_ids=None):
        self.analysis_tag = analysis_tag
        self.dry_run = dry_run
        self.stage = PLANNED
        self.current_chromosome = None

        self.totals = {}
        self.new_pairs = set()
        # stable_id -> seen while counting
        self.limit_ids = {gsi: False for gsi in (limit_ids or ())}

        self.failed_windows = []
        self.failed_chromosomes = {}
        self.processed_chromosomes = []

    def set_stage(self, stage: str, chromosome: str = None):
        if stage not in RUN_STAGES:
            raise ValueError(f"Unknown run stage: {stage}")
        self.stage = stage
        if chromosome is not None:
            self.current_chromosome = chromosome

    # Totals
    def start_chromosome(self, chromosome: str) -> Counter:
        self.totals[chromosome] = Counter()
        return self.totals[chromosome]

    def add_total(self, chromosome: str, bucket_name: str):
        self.totals.setdefault(chromosome, Counter())[bucket_name] += 1

    def chromosome_totals(self, chromosome: str) -> dict:
        return dict(self.totals.get(chromosome, {}))

    # Classification
    def record_new_pair(self, name: str):
        self.new_pairs.add(name)

    # Limit set
    @property
    def has_limit(self) -> bool:
        return bool(self.limit_ids)

    def accepts(self, stable_id) -> bool:
        """True when the gene may be counted; marks limit ids as found."""
        if not self.limit_ids:
            return True
        if stable_id not in self.limit_ids:
            return False
        self.limit_ids[stable_id] = True
        return True

    @property
    def missing_ids(self) -> list:
        return sorted(gsi for gsi, found in self.limit_ids.items() if not found)

    # Failures
    def record_window_failure(self, chromosome, start, end, error):
        self.failed_windows.append((chromosome, start, end, str(error)))

    def record_chromosome_failure(self, chromosome, error):
        self.failed_chromosomes[chromosome] = str(error)

    @property
    def succeeded(self) -> bool:
        return not self.failed_chromosomes

    def stats(self) -> dict:
        return {
            "stage": self.stage,
            "dry_run": self.dry_run,
            "chromosomes": list(self.processed_chromosomes),
            "new_pairs": sorted(self.new_pairs),
            "failed_windows": len(self.failed_windows),
            "failed_chromosomes": dict(self.failed_chromosomes),
            "missing_ids": self.missing_ids,
        }
