import copy
import tomllib
from pathlib import Path

CONFIG_FILE = ".genedensity.toml"

DEFAULT_CONFIG = {
    "database": {"db_uri": None},
    "density": {
        "threshold": 5_000_000,
        "target_bins": 150,
        "analysis_tag": "genedensity",
        "gene_types": None,
    },
    "logging": {"log_file": "genedensity.log", "log_level": "INFO"},
}


def load_config(config_file=None):
    """
    Reads the TOML config (default: ./.genedensity.toml) and merges it over
    DEFAULT_CONFIG. Unknown sections are kept as they are.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = Path(config_file) if config_file else Path.cwd() / CONFIG_FILE
    if not path.exists():
        return config

    with path.open("rb") as f:
        user_config = tomllib.load(f)

    for section, values in user_config.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)
        else:
            config[section] = values
    return config
