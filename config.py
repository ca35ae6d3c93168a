# config.py
"""
Config loader for the garden project.

Provides a single entry `load_config(path=None)` that reads YAML config from
`config/defaults.yaml` by default and returns a nested dict. Also exposes
`get_default_config()` for quick access, `get_growth_config()` for the growth
section and `get_plant_catalog()` for the seed plant types.
"""

import os
import logging
import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), 'config'))
DEFAULT_PATH = os.path.join(CONFIG_DIR, 'defaults.yaml')
PLANTS_PATH = os.path.join(CONFIG_DIR, 'plants.yaml')


def _read_yaml(p):
    if not os.path.exists(p):
        raise FileNotFoundError(f"Config file not found: {p}")
    with open(p, 'r') as f:
        return yaml.safe_load(f) or {}


def load_config(path=None):
    """Load YAML config and return a dict."""
    p = path or DEFAULT_PATH
    cfg = _read_yaml(p)

    override = cfg.get('growth', {}).get('total_hours_override')
    if override is not None:
        logger.warning("[config] growth.total_hours_override = %s hours applies to every plant", override)
    return cfg


def get_default_config():
    return load_config(DEFAULT_PATH)


def get_growth_config(path=None):
    return load_config(path).get('growth', {}) or {}


def get_plant_catalog(path=None):
    """Return the list of plant type rows from `config/plants.yaml`."""
    data = _read_yaml(path or PLANTS_PATH)
    return data.get('plants', [])


if __name__ == '__main__':
    print(load_config())
