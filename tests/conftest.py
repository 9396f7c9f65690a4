# tests/conftest.py

import pytest
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock
from genedensity.db.base import Base
from genedensity.db.models import SeqRegion, Gene
from genedensity.density.classifier import GeneTypeClassifier
from genedensity.density.feature_store import FeatureStore
from genedensity.density.records import Chromosome, Feature

# Force loading of models
import genedensity.db.models  # noqa: F401

EXAMPLE_SEED = (
    Path(__file__).parent.parent
    / "genedensity"
    / "db"
    / "seed"
    / "example_vega.json"
)


@pytest.fixture
def example_seed():
    return EXAMPLE_SEED


@pytest.fixture(scope="function")
def db_session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # The tables will only be created if the models are loaded
    Base.metadata.create_all(engine)

    Session = sessionmaker(bind=engine)
    session = Session()

    yield session

    session.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def seeded_session(db_session):
    """Two chromosomes, one clone and a handful of genes."""
    chr1 = SeqRegion(name="1", coord_system="chromosome", length=1_000_000)
    chr2 = SeqRegion(name="2", coord_system="chromosome", length=400_000)
    clone = SeqRegion(name="AC000001.1", coord_system="clone", length=150_000)
    db_session.add_all([chr1, chr2, clone])
    db_session.flush()

    genes = [
        # chr1: one gene inside window 10001-20000
        (chr1, "G1", "X", "KNOWN", 10_005, 10_020),
        # chr1: spans the 30000/30001 boundary
        (chr1, "G2", "Y", "KNOWN", 29_990, 30_050),
        (chr1, "G3", "Z", "KNOWN", 500_000, 500_100),
        (chr1, "G4", "unknown_biotype", "NOVEL", 700_000, 700_100),
        (chr2, "G5", "X", "KNOWN", 1, 500),
        (chr2, "G6", "Z", "KNOWN", 399_000, 400_000),
        (clone, "G7", "X", "KNOWN", 100, 200),
    ]
    for region, stable_id, biotype, status, start, end in genes:
        db_session.add(
            Gene(
                seq_region_id=region.id,
                stable_id=stable_id,
                biotype=biotype,
                status=status,
                seq_region_start=start,
                seq_region_end=end,
            )
        )
    db_session.commit()
    return db_session


@pytest.fixture
def simple_gene_types():
    """X and Y share no logic name; Z has no display code; TOT sums X and Y."""
    return {
        "X_KNOWN": {"logic_name": "xDensity", "code": "XCount", "description": "Number of X"},  # noqa E501
        "Y_KNOWN": {"logic_name": "yDensity", "code": "YCount", "description": "Number of Y"},  # noqa E501
        "Z_KNOWN": {"logic_name": "yDensity", "code": "", "description": ""},
        "total_XY_UNKNOWN": {
            "logic_name": "",
            "code": "XYCount",
            "description": "Number of X and Y",
            "parts": ["X_KNOWN", "Y_KNOWN"],
        },
    }


@pytest.fixture
def simple_classifier(simple_gene_types):
    return GeneTypeClassifier(simple_gene_types)


@pytest.fixture
def mock_logger():
    return MagicMock()


class FakeFeatureStore(FeatureStore):
    """In-memory store; `fail_windows` holds (chromosome, start) to raise on."""

    def __init__(self, chromosomes, features, fail_windows=()):
        self.chromosomes = chromosomes
        self.features = features
        self.fail_windows = set(fail_windows)
        self.stored_records = {}
        self.stored_summaries = {}
        self.registered = None
        self.pruned = []

    def list_chromosomes(self, names=None):
        if names:
            return [c for c in self.chromosomes if c.name in names]
        return list(self.chromosomes)

    def fetch_features(self, chromosome, window_start, window_end):
        if (chromosome.name, window_start) in self.fail_windows:
            raise RuntimeError("lost connection to feature store")
        return [
            f
            for f in self.features.get(chromosome.name, [])
            if f.start <= window_end and f.end >= window_start
        ]

    def list_category_pairs(self):
        pairs = {
            (f.biotype, f.status)
            for features in self.features.values()
            for f in features
        }
        return sorted(pairs)

    def register_density_types(self, logic_names, block_sizes, tag):
        self.registered = (list(logic_names), list(block_sizes), tag)

    def store_density_records(self, chromosome, block_size, records):
        self.stored_records[chromosome.name] = list(records)
        return len(self.stored_records[chromosome.name])

    def store_chromosome_summary(self, chromosome, entries):
        self.stored_summaries[chromosome.name] = list(entries)

    def prune_by_tag(self, tag, codes=()):
        self.pruned.append((tag, list(codes)))
        return {"analysis": 0}


@pytest.fixture
def fake_store_factory():
    def factory(chromosomes=None, features=None, fail_windows=()):
        return FakeFeatureStore(chromosomes or [], features or {}, fail_windows)

    return factory


@pytest.fixture
def single_gene_store(fake_store_factory):
    """A 1 Mb chromosome holding one X gene at 10005-10020."""
    chrom = Chromosome(name="1", length=1_000_000, id=1)
    return fake_store_factory(
        chromosomes=[chrom],
        features={"1": [Feature(10_005, 10_020, "X", "KNOWN", "G1")]},
    )
