"""Configuration block tree models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class EntryKind(str, Enum):
    """Kind of a configuration entry."""

    FIELD = "field"
    BLOCK = "block"


class FieldCategory(str, Enum):
    """Documentation category of a configuration field."""

    BASIC = "basic"
    ADVANCED = "advanced"
    EXPERIMENTAL = "experimental"
    DEPRECATED = "deprecated"


class ConfigEntry(BaseModel):
    """A field or a nested block inside a :class:`ConfigBlock`.

    Attributes:
        kind: Whether the entry is a leaf field or a nested block.
        name: YAML key of the entry.
        required: True if the model declares the field without a default.
        block: The nested block (block entries only).
        block_description: Description of the nested block.
        root: True if the nested block is a root block.
        field_flag: CLI flag bound to the field, empty if YAML-only.
        field_description: Field description, falling back to the flag usage.
        field_type: Human readable type name.
        field_default: Default value in string form.
        field_category: Documentation category.
    """

    kind: EntryKind
    name: str
    required: bool = False

    block: ConfigBlock | None = None
    block_description: str = ""
    root: bool = False

    field_flag: str = ""
    field_description: str = ""
    field_type: str = ""
    field_default: str = ""
    field_category: FieldCategory = FieldCategory.BASIC


class ConfigBlock(BaseModel):
    """A named group of configuration entries in declaration order.

    Blocks sharing a ``name`` have the same entry shape and only differ in
    their flag names. ``flags_prefix`` is the prefix distinguishing this
    instance; ``flags_prefixes`` lists the prefixes of all its duplicates.
    """

    name: str
    description: str = ""
    root: bool = False
    entries: list[ConfigEntry] = Field(default_factory=list)
    flags_prefix: str = ""
    flags_prefixes: list[str] = Field(default_factory=list)

    def add(self, entry: ConfigEntry) -> None:
        self.entries.append(entry)

    def first_field(self) -> ConfigEntry | None:
        """Return the first direct field entry, skipping nested blocks."""
        for entry in self.entries:
            if entry.kind is EntryKind.FIELD:
                return entry
        return None


ConfigEntry.model_rebuild()
ConfigBlock.model_rebuild()
