from sqlalchemy import delete, select
from sqlalchemy.orm import Session
from genedensity.db.models import (
    SeqRegion,
    Gene,
    Analysis,
    DensityType,
    DensityFeature,
    AttribType,
    SeqRegionAttrib,
)
from genedensity.density.records import Chromosome, Feature


class FeatureStore:
    """
    Collaborator contract of the density run: where chromosomes and genes
    come from and where densities and summaries go.
    """

    def list_chromosomes(self, names=None) -> list:
        raise NotImplementedError("Subclasses must implement `list_chromosomes()`.")  # noqa E501

    def fetch_features(self, chromosome, window_start, window_end) -> list:
        raise NotImplementedError("Subclasses must implement `fetch_features()`.")  # noqa E501

    def list_category_pairs(self) -> list:
        raise NotImplementedError("Subclasses must implement `list_category_pairs()`.")  # noqa E501

    def register_density_types(self, logic_names, block_sizes, tag):
        raise NotImplementedError("Subclasses must implement `register_density_types()`.")  # noqa E501

    def store_density_records(self, chromosome, block_size, records):
        raise NotImplementedError("Subclasses must implement `store_density_records()`.")  # noqa E501

    def store_chromosome_summary(self, chromosome, entries):
        raise NotImplementedError("Subclasses must implement `store_chromosome_summary()`.")  # noqa E501

    def prune_by_tag(self, tag, codes=()) -> dict:
        raise NotImplementedError("Subclasses must implement `prune_by_tag()`.")  # noqa E501


class SQLFeatureStore(FeatureStore):
    """FeatureStore over the EnsEMBL-style tables of genedensity.db.models."""

    COORD_SYSTEM = "chromosome"

    def __init__(self, session: Session, logger=None):
        self.session = session
        self.logger = logger
        # (block_size, logic_name) -> density_type.id
        self._density_types = {}

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def list_chromosomes(self, names=None) -> list:
        query = self.session.query(SeqRegion).filter(
            SeqRegion.coord_system == self.COORD_SYSTEM
        )
        if names:
            names = [str(n) for n in names]
            query = query.filter(SeqRegion.name.in_(names))

        chromosomes = [
            Chromosome(name=row.name, length=row.length, id=row.id)
            for row in query.order_by(SeqRegion.id).all()
        ]

        if names and self.logger:
            found = {c.name for c in chromosomes}
            for name in names:
                if name not in found:
                    self.logger.log(f"⚠️ Chromosome not found: {name}", "WARNING")  # noqa E501
        return chromosomes

    def fetch_features(self, chromosome, window_start, window_end) -> list:
        rows = (
            self.session.query(Gene)
            .filter(
                Gene.seq_region_id == chromosome.id,
                Gene.seq_region_start <= window_end,
                Gene.seq_region_end >= window_start,
            )
            .order_by(Gene.seq_region_start, Gene.id)
            .all()
        )
        return [
            Feature(
                start=row.seq_region_start,
                end=row.seq_region_end,
                biotype=row.biotype,
                status=row.status,
                stable_id=row.stable_id,
            )
            for row in rows
        ]

    def list_category_pairs(self) -> list:
        rows = (
            self.session.query(Gene.biotype, Gene.status)
            .group_by(Gene.biotype, Gene.status)
            .all()
        )
        return [(biotype, status) for biotype, status in rows]

    # ------------------------------------------------------------------
    # WRITE
    # ------------------------------------------------------------------
    def register_density_types(self, logic_names, block_sizes, tag):
        """
        Creates (or reuses) one analysis per logic name and one density type
        per (logic name, block size), all tagged with `tag` as program.
        """
        try:
            for logic_name in logic_names:
                analysis = (
                    self.session.query(Analysis)
                    .filter_by(logic_name=logic_name, program=tag)
                    .first()
                )
                if not analysis:
                    analysis = Analysis(
                        logic_name=logic_name,
                        program=tag,
                        db="ensembl",
                        gff_source=tag,
                        gff_feature="density",
                    )
                    self.session.add(analysis)
                    self.session.flush()

                for block_size in block_sizes:
                    density_type = (
                        self.session.query(DensityType)
                        .filter_by(analysis_id=analysis.id, block_size=block_size)
                        .first()
                    )
                    if not density_type:
                        density_type = DensityType(
                            analysis_id=analysis.id,
                            block_size=block_size,
                            value_type="sum",
                        )
                        self.session.add(density_type)
                        self.session.flush()
                    self._density_types[(block_size, logic_name)] = density_type.id  # noqa E501

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return dict(self._density_types)

    def store_density_records(self, chromosome, block_size, records):
        try:
            features = []
            for record in records:
                key = (block_size, record.density_type)
                if key not in self._density_types:
                    raise ValueError(
                        f"Density type {record.density_type} not registered for block size {block_size}"  # noqa E501
                    )
                features.append(
                    DensityFeature(
                        density_type_id=self._density_types[key],
                        seq_region_id=chromosome.id,
                        seq_region_start=record.start,
                        seq_region_end=record.end,
                        density_value=record.value,
                    )
                )
            self.session.bulk_save_objects(features)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return len(records)

    def store_chromosome_summary(self, chromosome, entries):
        try:
            for entry in entries:
                attrib_type = (
                    self.session.query(AttribType)
                    .filter_by(code=entry.code)
                    .first()
                )
                if not attrib_type:
                    attrib_type = AttribType(
                        code=entry.code,
                        name=entry.bucket_name,
                        description=entry.description,
                    )
                    self.session.add(attrib_type)
                    self.session.flush()

                self.session.add(
                    SeqRegionAttrib(
                        seq_region_id=chromosome.id,
                        attrib_type_id=attrib_type.id,
                        value=str(entry.value),
                    )
                )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return len(entries)

    def prune_by_tag(self, tag, codes=()) -> dict:
        """
        Deletes the analyses whose program is `tag` with their density types
        and features, then the attrib types of `codes` with their values.
        Rows of other programs are left alone.
        """
        no_sync = {"synchronize_session": False}
        analysis_ids = select(Analysis.id).where(Analysis.program == tag)
        type_ids = select(DensityType.id).where(
            DensityType.analysis_id.in_(analysis_ids)
        )
        codes = list(codes)
        attrib_ids = select(AttribType.id).where(AttribType.code.in_(codes))

        deleted = {}
        try:
            deleted["density_feature"] = self.session.execute(
                delete(DensityFeature).where(
                    DensityFeature.density_type_id.in_(type_ids)
                ),
                execution_options=no_sync,
            ).rowcount
            deleted["density_type"] = self.session.execute(
                delete(DensityType).where(DensityType.analysis_id.in_(analysis_ids)),  # noqa E501
                execution_options=no_sync,
            ).rowcount
            deleted["analysis"] = self.session.execute(
                delete(Analysis).where(Analysis.program == tag),
                execution_options=no_sync,
            ).rowcount
            deleted["seq_region_attrib"] = self.session.execute(
                delete(SeqRegionAttrib).where(
                    SeqRegionAttrib.attrib_type_id.in_(attrib_ids)
                ),
                execution_options=no_sync,
            ).rowcount
            deleted["attrib_type"] = self.session.execute(
                delete(AttribType).where(AttribType.code.in_(codes)),
                execution_options=no_sync,
            ).rowcount
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self._density_types.clear()
        return deleted
