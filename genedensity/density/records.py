"""
Plain value objects passed between the feature store and the density core.

They carry no database state; the store maps ORM rows to these and back.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Chromosome:
    name: str
    length: int
    id: Optional[int] = None


@dataclass(frozen=True)
class Feature:
    """A gene as seen by the counter. Coordinates are 1-based, inclusive."""

    start: int
    end: int
    biotype: str
    status: Optional[str]
    stable_id: Optional[str] = None


@dataclass(frozen=True)
class DensityRecord:
    chromosome: str
    block_size: int
    start: int
    end: int
    density_type: str  # logic name shared by one or more buckets
    value: int


@dataclass(frozen=True)
class SummaryEntry:
    bucket_name: str
    code: str
    description: str
    value: int
