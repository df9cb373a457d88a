"""Utils module - Utility functions."""

from roadquery_core.utils.config import (
    Config,
    load_config,
)
from roadquery_core.utils.helpers import (
    normalize_fragment,
    append_querystring,
)

__all__ = [
    "Config",
    "load_config",
    "normalize_fragment",
    "append_querystring",
]
