from .bin_planner import plan_block_sizes, round_block_size, count_windows
from .classifier import DensityBucket, GeneTypeClassifier
from .counter import BinnedCounter
from .aggregator import ChromosomeAggregator
from .feature_store import FeatureStore, SQLFeatureStore
from .run_context import RunContext
from .density_manager import DensityManager, read_limit_file

__all__ = [
    "plan_block_sizes",
    "round_block_size",
    "count_windows",
    "DensityBucket",
    "GeneTypeClassifier",
    "BinnedCounter",
    "ChromosomeAggregator",
    "FeatureStore",
    "SQLFeatureStore",
    "RunContext",
    "DensityManager",
    "read_limit_file",
]
