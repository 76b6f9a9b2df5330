"""Filter configuration loading."""
from __future__ import annotations


from pathlib import Path

import yaml


DEFAULT_CONFIG_PATH = Path("plddt-project/config/filter.yaml")

DEFAULTS = {
    "report_interval": 100,
    "strict_record_names": False,
    "suffix": ".pdb",
    "workers": None,
}


def load_config(config_path: Path | None = None) -> dict:
    """
    Load filter settings from a YAML file, falling back to defaults.

    Args:
        config_path: Explicit config file. If None, the default config is
                     used when present, otherwise the built-in defaults.

    Returns:
        Dict with every key of DEFAULTS.
    """
    config = dict(DEFAULTS)
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return config
        config_path = DEFAULT_CONFIG_PATH
    elif not config_path.exists():
        raise FileNotFoundError(f"Missing config: {config_path}")

    loaded = yaml.safe_load(config_path.read_text()) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config {config_path} must be a mapping")

    unknown = sorted(set(loaded) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")
    config.update(loaded)

    interval = config["report_interval"]
    if not isinstance(interval, int) or isinstance(interval, bool) or interval <= 0:
        raise ValueError(f"report_interval must be a positive integer, got {interval!r}")
    if not isinstance(config["strict_record_names"], bool):
        raise ValueError("strict_record_names must be true or false")
    if not isinstance(config["suffix"], str) or not config["suffix"]:
        raise ValueError("suffix must be a non-empty string")
    workers = config["workers"]
    if workers is not None and (not isinstance(workers, int) or isinstance(workers, bool)):
        raise ValueError(f"workers must be an integer or null, got {workers!r}")
    return config
