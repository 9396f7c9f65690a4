from genedensity.genedensity import GeneDensity

__version__ = "1.0.0"

__all__ = ["GeneDensity", "__version__"]
