import pandas as pd
from genedensity.report.reports.base_report import ReportBase
from genedensity.db.models import AttribType, SeqRegionAttrib, SeqRegion


class ChromosomeSummaryReport(ReportBase):
    name = "chromosome_summary"
    description = "Gene totals per chromosome, one column per summary code."

    @classmethod
    def explain(cls) -> str:
        return """
### Chromosome Summary Report

Pivot of the seq_region attribs written by a density run: one row per
chromosome, one column per attrib code.

Parameters:
- codes: attrib codes to include (default: all codes found)
- chromosomes: list or comma separated names (default: all)
        """

    def run(self):
        codes = self.resolve_input_list(self.params.get("codes"), "codes")
        chromosomes = self.resolve_input_list(
            self.params.get("chromosomes"), "chromosomes"
        )

        query = (
            self.session.query(
                SeqRegion.name.label("chromosome"),
                AttribType.code,
                SeqRegionAttrib.value,
            )
            .join(AttribType, SeqRegionAttrib.attrib_type_id == AttribType.id)
            .join(SeqRegion, SeqRegionAttrib.seq_region_id == SeqRegion.id)
        )
        if codes:
            query = query.filter(AttribType.code.in_(codes))
        if chromosomes:
            query = query.filter(SeqRegion.name.in_(chromosomes))

        df = pd.DataFrame(
            [tuple(row) for row in query.all()],
            columns=["chromosome", "code", "value"],
        )
        if df.empty:
            return df

        df["value"] = pd.to_numeric(df["value"], errors="coerce").fillna(0).astype(int)  # noqa E501
        summary = df.pivot_table(
            index="chromosome", columns="code", values="value", aggfunc="sum"
        )
        summary.columns.name = None
        return summary.reset_index()
