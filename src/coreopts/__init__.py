"""coreopts: multiple-choice core options with persisted selections.

Parses the ``"Description; a|b|c"`` descriptors a pluggable core exposes,
keeps the user's selection for each option, and writes the selections
back to a flat key/value option file.
"""

from coreopts.descriptor import CoreOption, Variable, parse_descriptor
from coreopts.errors import (
    ConfigError,
    DescriptorError,
    ManagerClosedError,
    OptionsError,
    StoreClosedError,
    StoreOpenError,
)
from coreopts.manager import CoreOptionManager, load_options, option_count
from coreopts.store import ConfigStore

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConfigStore",
    "CoreOption",
    "CoreOptionManager",
    "DescriptorError",
    "ManagerClosedError",
    "OptionsError",
    "StoreClosedError",
    "StoreOpenError",
    "Variable",
    "load_options",
    "option_count",
    "parse_descriptor",
]
