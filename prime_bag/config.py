"""
Configuration.

Responsibility: the size of the prime tables. Read once, before the first
table is built.
"""

import os
from functools import lru_cache
from typing import Any, Dict

import yaml

from .exceptions import ConfigError

CONFIG_ENV_VAR = 'PRIME_BAG_CONFIG'

# 128 primes per width; the 8-bit table stops at 251 regardless
DEFAULT_CONFIG: Dict[str, Any] = {
    'num_primes': 128,
}


def load_config(path: str = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file, merged over the defaults.

    Parameters
    ----------
    path : str, optional
        YAML file holding a mapping. If None, the defaults are returned.

    Returns
    -------
    dict
        Configuration with every key of DEFAULT_CONFIG present.

    Raises
    ------
    ConfigError
        If the file is not a mapping or a value is invalid.
    """
    config = dict(DEFAULT_CONFIG)
    if path is None:
        return config

    with open(path) as f:
        loaded = yaml.safe_load(f)

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(loaded).__name__}")

    config.update(loaded)

    num_primes = config['num_primes']
    if isinstance(num_primes, bool) or not isinstance(num_primes, int) or num_primes < 1:
        raise ConfigError(f"num_primes must be an integer >= 1, got {num_primes!r}")

    return config


@lru_cache(maxsize=None)
def get_config() -> Dict[str, Any]:
    """Process-wide configuration, from $PRIME_BAG_CONFIG if set."""
    return load_config(os.environ.get(CONFIG_ENV_VAR))
