"""Utility functions for cafarank."""

from cafarank.utils.logging import get_logger, level_for, setup_logging
from cafarank.utils.config_io import load_run_config, model_to_dict, read_model, write_model
from cafarank.utils.stats_io import (
    load_bootstrap_stats,
    load_term_aucs,
    parse_bootstrap_stats,
    parse_term_aucs,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "level_for",
    "load_run_config",
    "model_to_dict",
    "read_model",
    "write_model",
    "load_bootstrap_stats",
    "load_term_aucs",
    "parse_bootstrap_stats",
    "parse_term_aucs",
]
