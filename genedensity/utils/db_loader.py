# utils/db_loader.py

from importlib import import_module


def load_all_models():
    """
    Import all models modules to ensure SQLAlchemy registers all tables.
    """
    import_module("genedensity.db.models.model_core")
    import_module("genedensity.db.models.model_density")
    import_module("genedensity.db.models.model_attrib")
    import_module("genedensity.db.models.model_run")
