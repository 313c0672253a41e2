"""Shared schemas for flagdoc."""

from flagdoc.schemas.blocks import ConfigBlock, ConfigEntry, EntryKind, FieldCategory
from flagdoc.schemas.flags import FlagInfo

__all__ = ["ConfigBlock", "ConfigEntry", "EntryKind", "FieldCategory", "FlagInfo"]
