from genedensity.density.bin_planner import count_windows
from genedensity.density.records import DensityRecord
from genedensity.density.run_context import COUNTING


class BinnedCounter:
    """
    Walks a chromosome in consecutive windows of one block size and counts
    the genes of each density type per window.

    Per-window counts include every gene the window query returns (genes
    overlapping the window). Chromosome totals only take a gene in the first
    window that touches it: a gene starting before the window start was
    already counted in an earlier window.
    """

    def __init__(self, store, classifier, context, logger):
        self.store = store
        self.classifier = classifier
        self.context = context
        self.logger = logger
        self.density_types = classifier.density_types

    @staticmethod
    def iter_windows(length: int, block_size: int):
        """Yields (start, end), 1-based inclusive, covering [1, length]."""
        if block_size <= 0:
            raise ValueError(f"block_size must be positive, got {block_size}")
        start = 1
        while start <= length:
            end = min(start + block_size - 1, length)
            yield start, end
            start = end + 1

    def count_window(self, chromosome, start, end, features) -> dict:
        num = {density_type: 0 for density_type in self.density_types}

        for feature in features:
            if not self.context.accepts(feature.stable_id):
                continue

            bucket = self.classifier.classify(
                feature.biotype, feature.status, self.context
            )
            if bucket is None:
                continue

            # first-touch window only
            if feature.start >= start:
                self.context.add_total(chromosome.name, bucket.name)
            num[bucket.logic_name] += 1

        return num

    def count_chromosome(self, chromosome, block_size: int) -> list:
        """
        Returns the DensityRecords of every window fetched successfully.

        A window whose fetch raises is logged and left out entirely, the
        chromosome carries on with the next window.
        """
        self.context.set_stage(COUNTING, chromosome.name)
        bins = count_windows(chromosome.length, block_size)
        records = []

        for i, (start, end) in enumerate(
            self.iter_windows(chromosome.length, block_size), start=1
        ):
            try:
                features = self.store.fetch_features(chromosome, start, end)
            except Exception as e:
                msg = f"⚠️ Chr {chromosome.name} window {start}-{end} skipped: {e}"  # noqa E501
                self.logger.log(msg, "WARNING")
                self.context.record_window_failure(chromosome.name, start, end, e)
                continue

            num = self.count_window(chromosome, start, end, features)
            for density_type in self.density_types:
                records.append(
                    DensityRecord(
                        chromosome=chromosome.name,
                        block_size=block_size,
                        start=start,
                        end=end,
                        density_type=density_type,
                        value=num[density_type],
                    )
                )

            counts = ",".join(str(num[t]) for t in self.density_types)
            self.logger.log(
                f"Chr: {chromosome.name} | Bin: {i}/{bins} | Counts: {counts}",
                "DEBUG",
            )

        return records
