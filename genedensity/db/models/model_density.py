from genedensity.db.base import Base
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float


class Analysis(Base):
    """
    Describes the program that produced a set of features.

    The density run writes one row per density logic name, all sharing the
    same `program` tag. Pruning a previous run deletes by that tag.
    """

    __tablename__ = "analysis"

    id = Column(Integer, primary_key=True, autoincrement=True)
    logic_name = Column(String(128), nullable=False, index=True)
    program = Column(String(80), nullable=True, index=True)
    db = Column(String(120), nullable=True)
    gff_source = Column(String(40), nullable=True)
    gff_feature = Column(String(40), nullable=True)
    created = Column(DateTime, server_default=func.now(), nullable=False)

    # Relationships (Go Down)
    density_types = relationship(
        "DensityType",
        back_populates="analysis",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Analysis(logic_name={self.logic_name}, program={self.program})>"  # noqa E501


class DensityType(Base):
    """One density series definition: an analysis sampled at a block size."""

    __tablename__ = "density_type"

    id = Column(Integer, primary_key=True, autoincrement=True)
    analysis_id = Column(
        Integer,
        ForeignKey("analysis.id", ondelete="CASCADE"),
        nullable=False,
    )
    block_size = Column(Integer, nullable=False)
    value_type = Column(String(10), nullable=False, default="sum")

    # Relationships (Go Up)
    analysis = relationship("Analysis", back_populates="density_types")

    # Relationships (Go Down)
    features = relationship(
        "DensityFeature",
        back_populates="density_type",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<DensityType(analysis_id={self.analysis_id}, block_size={self.block_size})>"  # noqa E501


class DensityFeature(Base):
    """A single density value for one window of a seq region."""

    __tablename__ = "density_feature"

    id = Column(Integer, primary_key=True, autoincrement=True)
    density_type_id = Column(
        Integer,
        ForeignKey("density_type.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seq_region_id = Column(
        Integer,
        ForeignKey("seq_region.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seq_region_start = Column(Integer, nullable=False)
    seq_region_end = Column(Integer, nullable=False)
    density_value = Column(Float, nullable=False, default=0)

    # Relationships (Go Up)
    density_type = relationship("DensityType", back_populates="features")
    seq_region = relationship("SeqRegion")
