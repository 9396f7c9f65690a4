from genedensity.db.base import Base
from sqlalchemy.sql import func
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Enum


def get_run_status_enum(name: str):
    return Enum(
        "pending",
        "running",
        "completed",
        "failed",
        name=name,
    )  # noqa E501


class DensityRun(Base):
    """
    Audit row for one density computation.

    Written only when results are persisted (never in dry-run) and left in
    place by prune, so the history of runs survives a clean re-run.
    """

    __tablename__ = "density_run"

    id = Column(Integer, primary_key=True, autoincrement=True)
    analysis_tag = Column(String(80), nullable=False)
    status = Column(
        get_run_status_enum("density_run_status_enum"),
        nullable=False,
        default="running",
    )
    dry_run = Column(Boolean, nullable=False, default=False)
    chromosomes = Column(Text, nullable=True)  # comma separated subset
    run_start = Column(DateTime, server_default=func.now(), nullable=False)
    run_end = Column(DateTime, nullable=True)
    stats = Column(Text, nullable=True)  # JSON

    def __repr__(self):
        return f"<DensityRun(id={self.id}, status={self.status})>"


"""
================================================================================
Developer Note - Density Models
================================================================================

The schema mirrors the EnsEMBL core tables the density run touches:

- `seq_region` / `gene`: read-only input (chromosomes and their genes).
- `analysis` / `density_type` / `density_feature`: per-window density series,
    one analysis per logic name, one density type per block size.
- `attrib_type` / `seq_region_attrib`: per-chromosome summary counts keyed by
    the bucket display code.
- `density_run`: audit trail of runs, not part of the EnsEMBL schema.

Prune deletes analysis rows by `program` and walks down to density types and
features explicitly, so it does not depend on SQLite foreign key enforcement.

================================================================================
"""
