from genedensity.db.base import Base
from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, ForeignKey, Index


class SeqRegion(Base):
    """
    A top-level sequence region of the assembly (chromosome, scaffold, ...).

    Only regions whose coord_system is 'chromosome' are considered by the
    density run. Lengths are in base pairs and coordinates on the region are
    1-based and inclusive.
    """

    __tablename__ = "seq_region"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(40), nullable=False, index=True)  # Ex: "1", "X"
    coord_system = Column(String(40), nullable=False, default="chromosome")
    length = Column(Integer, nullable=False)

    # Relationships (Go Down)
    genes = relationship("Gene", back_populates="seq_region")
    attribs = relationship(
        "SeqRegionAttrib",
        back_populates="seq_region",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<SeqRegion(name={self.name}, length={self.length})>"


class Gene(Base):
    """
    Gene annotation anchored on a SeqRegion.

    biotype and status are the classification keys used to place a gene in a
    density bucket (e.g. 'protein_coding' / 'KNOWN').
    """

    __tablename__ = "gene"

    id = Column(Integer, primary_key=True, autoincrement=True)
    stable_id = Column(String(128), nullable=True, index=True)
    biotype = Column(String(40), nullable=False)
    status = Column(String(40), nullable=True)

    seq_region_id = Column(
        Integer,
        ForeignKey("seq_region.id", ondelete="CASCADE"),
        nullable=False,
    )
    seq_region_start = Column(Integer, nullable=False)
    seq_region_end = Column(Integer, nullable=False)
    seq_region_strand = Column(Integer, nullable=False, default=1)

    # Relationships (Go Up)
    seq_region = relationship("SeqRegion", back_populates="genes")

    __table_args__ = (
        Index("idx_gene_seq_region", "seq_region_id", "seq_region_start"),
    )

    def __repr__(self):
        return (
            f"<Gene(stable_id={self.stable_id}, "
            f"biotype={self.biotype}, status={self.status})>"
        )
