from .model_core import SeqRegion, Gene
from .model_density import Analysis, DensityType, DensityFeature
from .model_attrib import AttribType, SeqRegionAttrib
from .model_run import DensityRun

__all__ = [
    # # CORE MODELS
    "SeqRegion",
    "Gene",
    # # DENSITY MODELS
    "Analysis",
    "DensityType",
    "DensityFeature",
    # # ATTRIBUTE MODELS
    "AttribType",
    "SeqRegionAttrib",
    # # RUN MODELS
    "DensityRun",
]
