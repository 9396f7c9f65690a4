import pandas as pd
from genedensity.report.reports.base_report import ReportBase
from genedensity.db.models import Gene
from genedensity.density.classifier import GeneTypeClassifier, pair_name


class GeneTypesReport(ReportBase):
    name = "gene_types"
    description = "Biotype/status pairs in the database, their gene count and bucket."  # noqa E501

    @classmethod
    def explain(cls) -> str:
        return """
### Gene Types Report

Lists every (biotype, status) pair found in the gene table with the number
of genes and the density bucket it is counted in. Pairs with `new == True`
are not in the gene types table and are not counted by density runs.

Parameters:
- gene_types: path to a gene types JSON (default: packaged table)
        """

    def run(self):
        classifier = self.params.get("classifier") or GeneTypeClassifier.from_json(  # noqa E501
            self.params.get("gene_types")
        )

        rows = self.session.query(Gene.biotype, Gene.status, Gene.id).all()
        df = pd.DataFrame(
            [tuple(row) for row in rows], columns=["biotype", "status", "id"]
        )
        if df.empty:
            return pd.DataFrame(
                columns=["biotype_status", "genes", "logic_name", "code", "new"]
            )

        df["status"] = df["status"].fillna("")
        counts = (
            df.groupby(["biotype", "status"]).size().reset_index(name="genes")
        )

        records = []
        for item in counts.itertuples(index=False):
            bucket = classifier.classify(item.biotype, item.status)
            records.append(
                {
                    "biotype_status": pair_name(item.biotype, item.status),
                    "genes": int(item.genes),
                    "logic_name": bucket.logic_name if bucket else None,
                    "code": bucket.code if bucket else None,
                    "new": bucket is None,
                }
            )
        return pd.DataFrame(records)
