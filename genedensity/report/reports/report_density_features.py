import pandas as pd
from genedensity.report.reports.base_report import ReportBase
from genedensity.db.models import (
    Analysis,
    DensityType,
    DensityFeature,
    SeqRegion,
)


class DensityFeaturesReport(ReportBase):
    name = "density_features"
    description = "Per-window gene density series written by a density run."

    @classmethod
    def explain(cls) -> str:
        return """
### Density Features Report

One row per (chromosome, window, density type) with the gene count of the
window.

Parameters:
- analysis_tag: program tag of the run (default "genedensity")
- chromosomes: list or comma separated names (default: all)
- logic_names: restrict to these density types (default: all)

Example:
```python
gd.report("density_features", chromosomes="1,X")
```
        """

    def run(self):
        tag = self.params.get("analysis_tag", "genedensity")
        chromosomes = self.resolve_input_list(
            self.params.get("chromosomes"), "chromosomes"
        )
        logic_names = self.resolve_input_list(
            self.params.get("logic_names"), "logic_names"
        )

        query = (
            self.session.query(
                SeqRegion.name.label("chromosome"),
                DensityType.block_size,
                DensityFeature.seq_region_start.label("start"),
                DensityFeature.seq_region_end.label("end"),
                Analysis.logic_name,
                DensityFeature.density_value.label("value"),
            )
            .join(DensityType, DensityFeature.density_type_id == DensityType.id)
            .join(Analysis, DensityType.analysis_id == Analysis.id)
            .join(SeqRegion, DensityFeature.seq_region_id == SeqRegion.id)
            .filter(Analysis.program == tag)
        )
        if chromosomes:
            query = query.filter(SeqRegion.name.in_(chromosomes))
        if logic_names:
            query = query.filter(Analysis.logic_name.in_(logic_names))

        rows = query.order_by(
            SeqRegion.id, Analysis.logic_name, DensityFeature.seq_region_start
        ).all()

        df = pd.DataFrame(
            [tuple(row) for row in rows],
            columns=["chromosome", "block_size", "start", "end", "logic_name", "value"],  # noqa E501
        )
        df["value"] = df["value"].astype(int)
        return df
