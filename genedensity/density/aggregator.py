from genedensity.density.records import SummaryEntry


class ChromosomeAggregator:
    """Turns the bucket totals of one chromosome into summary entries."""

    def __init__(self, classifier):
        self.classifier = classifier

    def bucket_value(self, bucket, totals: dict) -> int:
        if bucket.is_composite:
            return sum(totals.get(part, 0) for part in bucket.parts)
        return totals.get(bucket.name, 0)

    def final_totals(self, totals: dict) -> dict:
        return {
            name: self.bucket_value(bucket, totals)
            for name, bucket in sorted(self.classifier.buckets.items())
        }

    def summarize(self, totals: dict) -> list:
        """One entry per bucket with a display code, zero values included."""
        return [
            SummaryEntry(
                bucket_name=bucket.name,
                code=bucket.code,
                description=bucket.description,
                value=self.bucket_value(bucket, totals),
            )
            for bucket in self.classifier.summary_buckets
        ]
