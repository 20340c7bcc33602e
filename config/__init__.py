"""Config package facade."""

from config.loader import ENV_KEYS, config_from_dict, load_config
from config.models import Config, FieldsConfig, OutputConfig, RtConfig

__all__ = [
    "ENV_KEYS",
    "Config",
    "FieldsConfig",
    "OutputConfig",
    "RtConfig",
    "config_from_dict",
    "load_config",
]
