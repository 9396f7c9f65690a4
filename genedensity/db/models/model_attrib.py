from genedensity.db.base import Base
from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, Text, ForeignKey


class AttribType(Base):
    """
    Named attribute kind attached to seq regions (e.g. 'KnownPCCount').

    The `code` is what the browser reads; `name` keeps the bucket name the
    statistic was computed for.
    """

    __tablename__ = "attrib_type"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(15), unique=True, nullable=False)
    name = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=True)

    # Relationships (Go Down)
    values = relationship(
        "SeqRegionAttrib",
        back_populates="attrib_type",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<AttribType(code={self.code})>"


class SeqRegionAttrib(Base):
    __tablename__ = "seq_region_attrib"

    id = Column(Integer, primary_key=True, autoincrement=True)
    seq_region_id = Column(
        Integer,
        ForeignKey("seq_region.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attrib_type_id = Column(
        Integer,
        ForeignKey("attrib_type.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value = Column(Text, nullable=False)

    # Relationships (Go Up)
    seq_region = relationship("SeqRegion", back_populates="attribs")
    attrib_type = relationship("AttribType", back_populates="values")
