import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_GENE_TYPES = Path(__file__).parent / "gene_types.json"


def pair_name(biotype: str, status: Optional[str]) -> str:
    return f"{biotype}_{status or ''}"


@dataclass(frozen=True)
class DensityBucket:
    name: str
    logic_name: str = ""
    code: str = ""
    description: str = ""
    parts: tuple = ()

    @property
    def is_composite(self) -> bool:
        return bool(self.parts)

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "DensityBucket":
        return cls(
            name=name,
            logic_name=data.get("logic_name") or "",
            code=data.get("code") or "",
            description=data.get("description") or "",
            parts=tuple(data.get("parts") or ()),
        )


class GeneTypeClassifier:
    """
    Static lookup from a gene (biotype, status) pair to its density bucket.

    Buckets are keyed by "<biotype>_<status>". Buckets with `parts` are
    composite: they are only ever computed as the sum of their parts and are
    never the target of a classification.
    """

    def __init__(self, buckets: dict):
        self.buckets = {
            name: (
                value
                if isinstance(value, DensityBucket)
                else DensityBucket.from_dict(name, value)
            )
            for name, value in buckets.items()
        }
        self.validate()

    @classmethod
    def from_json(cls, path=None):
        json_path = Path(path) if path else DEFAULT_GENE_TYPES
        if not json_path.exists():
            raise ValueError(f"Gene types file not found: {json_path}")
        with json_path.open("r") as f:
            data = json.load(f)
        return cls(data.get("gene_types", data))

    def validate(self):
        if not self.buckets:
            raise ValueError("Gene types table is empty")

        for bucket in self.buckets.values():
            if bucket.is_composite:
                for part in bucket.parts:
                    target = self.buckets.get(part)
                    if target is None:
                        raise ValueError(
                            f"Composite bucket '{bucket.name}' references unknown part '{part}'"  # noqa E501
                        )
                    if target.is_composite:
                        raise ValueError(
                            f"Composite bucket '{bucket.name}' references composite part '{part}'"  # noqa E501
                        )
            elif not bucket.logic_name:
                raise ValueError(
                    f"Bucket '{bucket.name}' has no logic_name and no parts"
                )

    @property
    def counted_buckets(self) -> list:
        return [b for b in self.buckets.values() if not b.is_composite]

    @property
    def density_types(self) -> list:
        """Logic names with a density series, one per distinct name."""
        return sorted({b.logic_name for b in self.counted_buckets})

    @property
    def summary_buckets(self) -> list:
        """Buckets reported in the chromosome summary (non-empty code)."""
        return sorted(
            (b for b in self.buckets.values() if b.code),
            key=lambda b: b.name,
        )

    def classify(self, biotype, status, context=None) -> Optional[DensityBucket]:
        """
        Returns the bucket of a (biotype, status) pair, or None when the pair
        is unknown or names a composite bucket. Unknown pairs are recorded as
        new on `context` when given.
        """
        name = pair_name(biotype, status)
        bucket = self.buckets.get(name)
        if bucket is None or bucket.is_composite:
            if context is not None:
                context.record_new_pair(name)
            return None
        return bucket

    def check_pairs(self, pairs) -> dict:
        """Maps every "<biotype>_<status>" in `pairs` to True when unknown."""
        result = {}
        for biotype, status in pairs:
            name = pair_name(biotype, status)
            bucket = self.buckets.get(name)
            result[name] = bucket is None or bucket.is_composite
        return dict(sorted(result.items()))
