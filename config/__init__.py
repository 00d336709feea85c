"""Config package facade."""

from config.loader import build_logger, config_from_dict, config_from_env, env_overrides
from config.merge import merge_dicts
from config.models import LoggerConfig

__all__ = [
    "LoggerConfig",
    "build_logger",
    "config_from_dict",
    "config_from_env",
    "env_overrides",
    "merge_dicts",
]
