"""flagdoc: document nested configuration models and their CLI flags."""

from flagdoc.config import PLACEHOLDER
from flagdoc.dedupe import annotate_flags_prefix, remove_flag_prefix
from flagdoc.exceptions import (
    ConfigStructureError,
    FlagdocError,
    FlagRegistrationError,
    UnresolvedFlagError,
)
from flagdoc.flags import FlagRegistry, FlagSet, parse_flags
from flagdoc.pipeline import build_config_tree
from flagdoc.prefix import find_flags_prefix
from flagdoc.schemas import ConfigBlock, ConfigEntry, EntryKind, FieldCategory, FlagInfo
from flagdoc.walker import RootBlock, parse_config

__all__ = [
    "PLACEHOLDER",
    "ConfigBlock",
    "ConfigEntry",
    "ConfigStructureError",
    "EntryKind",
    "FieldCategory",
    "FlagInfo",
    "FlagRegistrationError",
    "FlagRegistry",
    "FlagSet",
    "FlagdocError",
    "RootBlock",
    "UnresolvedFlagError",
    "annotate_flags_prefix",
    "build_config_tree",
    "find_flags_prefix",
    "parse_config",
    "parse_flags",
    "remove_flag_prefix",
]
