"""Walk a configuration model into an ordered tree of blocks and entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from flagdoc.config import FLAGDOC_MAX_DEPTH, FLAGDOC_REQUIRE_FLAGS
from flagdoc.exceptions import ConfigStructureError, UnresolvedFlagError
from flagdoc.field_utils import (
    field_category,
    field_type_name,
    format_default,
    is_hidden,
    is_inline,
    model_type_of,
    yaml_name,
)
from flagdoc.flags import FlagRegistry
from flagdoc.schemas import ConfigBlock, ConfigEntry, EntryKind
from flagdoc.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RootBlock:
    """A model class documented as a top-level configuration section.

    Attributes:
        name: Block name used in the documentation.
        model: The configuration model class.
        description: Block description, overridden by the embedding field's
            own description when it has one.
    """

    name: str
    model: type[BaseModel]
    description: str = ""


class ConfigWalker:
    """Builds config blocks from a live configuration instance.

    One walker is used per documentation run. The blocks it returns are the
    top-level block followed by every root block in first-encounter order;
    other nested blocks are only reachable through their parent's entries.
    """

    def __init__(
        self,
        flags: FlagRegistry,
        root_blocks: Sequence[RootBlock] = (),
        *,
        require_flags: bool = False,
        max_depth: int = FLAGDOC_MAX_DEPTH,
    ) -> None:
        self._flags = flags
        self._roots = {root.model: root for root in root_blocks}
        self._require_flags = require_flags
        self._max_depth = max_depth
        self._path: list[type[BaseModel]] = []
        self._blocks: list[ConfigBlock] = []

    def walk(self, cfg: BaseModel) -> list[ConfigBlock]:
        self._path = []
        self._blocks = []
        top = ConfigBlock(name="")
        self._blocks.append(top)
        self._walk_model(top, cfg, keys=())
        return self._blocks

    def _walk_model(self, block: ConfigBlock, instance: BaseModel, keys: tuple[str, ...]) -> None:
        model = type(instance)
        if model in self._path:
            cycle = " -> ".join(cls.__name__ for cls in [*self._path, model])
            raise ConfigStructureError(f"cyclic configuration type: {cycle}")
        if len(self._path) >= self._max_depth:
            raise ConfigStructureError(
                f"configuration nested deeper than {self._max_depth} levels at {'.'.join(keys)}"
            )

        self._path.append(model)
        try:
            for field_name, info in model.model_fields.items():
                if is_hidden(info):
                    continue
                sub_model = model_type_of(info.annotation)
                if sub_model is not None:
                    self._add_block_entry(block, instance, field_name, info, sub_model, keys)
                else:
                    block.add(self._field_entry(instance, field_name, info, keys))
        finally:
            self._path.pop()

    def _add_block_entry(
        self,
        block: ConfigBlock,
        instance: BaseModel,
        field_name: str,
        info: FieldInfo,
        sub_model: type[BaseModel],
        keys: tuple[str, ...],
    ) -> None:
        value = _field_value(instance, field_name)
        if value is None:
            # Unset section: document its shape, no flag can resolve.
            value = sub_model.model_construct()
        key = yaml_name(field_name, info)

        if is_inline(info):
            self._walk_model(block, value, (*keys, key))
            return

        root = self._roots.get(type(value)) or self._roots.get(sub_model)
        if root is not None:
            description = info.description or root.description
            sub_block = ConfigBlock(name=root.name, description=description, root=True)
            self._blocks.append(sub_block)
        else:
            description = info.description or ""
            sub_block = ConfigBlock(name=key, description=description)

        block.add(
            ConfigEntry(
                kind=EntryKind.BLOCK,
                name=key,
                required=info.is_required(),
                block=sub_block,
                block_description=description,
                root=sub_block.root,
            )
        )
        self._walk_model(sub_block, value, (*keys, key))

    def _field_entry(
        self,
        instance: BaseModel,
        field_name: str,
        info: FieldInfo,
        keys: tuple[str, ...],
    ) -> ConfigEntry:
        key = yaml_name(field_name, info)
        try:
            type_name = field_type_name(info.annotation)
        except ConfigStructureError as exc:
            raise ConfigStructureError(f"{'.'.join((*keys, key))}: {exc}") from exc

        flag = self._flags.lookup(instance, field_name)
        if flag is None and self._require_flags:
            raise UnresolvedFlagError(f"no CLI flag bound to {'.'.join((*keys, key))}")

        default = flag.default if flag is not None else format_default(_field_value(instance, field_name))
        return ConfigEntry(
            kind=EntryKind.FIELD,
            name=key,
            required=info.is_required(),
            field_flag=flag.name if flag is not None else "",
            field_description=info.description or (flag.usage if flag is not None else ""),
            field_type=type_name,
            field_default=default,
            field_category=field_category(info),
        )


def _field_value(instance: BaseModel, field_name: str) -> Any:
    """Return the value of a field, None if it was never set.

    Sections built with ``model_construct()`` leave required fields unset.
    """
    return instance.__dict__.get(field_name)


def parse_config(
    cfg: BaseModel,
    flags: FlagRegistry,
    root_blocks: Sequence[RootBlock] = (),
    *,
    require_flags: bool | None = None,
    max_depth: int | None = None,
) -> list[ConfigBlock]:
    """Build the config blocks of ``cfg``, resolving each field's CLI flag.

    Args:
        cfg: Live configuration instance the flags were registered against.
        flags: Registry built from ``cfg`` by :func:`flagdoc.flags.parse_flags`.
        root_blocks: Model classes documented as top-level sections.
        require_flags: Raise if a field has no flag. Defaults to
            ``FLAGDOC_REQUIRE_FLAGS``.
        max_depth: Maximum nesting depth. Defaults to ``FLAGDOC_MAX_DEPTH``.

    Returns:
        The top-level block followed by the root blocks, in walk order.

    Raises:
        ConfigStructureError: On cyclic or too deeply nested models, or field
            types that cannot be documented.
        UnresolvedFlagError: If ``require_flags`` is set and a field has no flag.
    """
    walker = ConfigWalker(
        flags,
        root_blocks,
        require_flags=FLAGDOC_REQUIRE_FLAGS if require_flags is None else require_flags,
        max_depth=FLAGDOC_MAX_DEPTH if max_depth is None else max_depth,
    )
    blocks = walker.walk(cfg)
    logger.debug("Walked configuration", extra={"config": type(cfg).__name__, "blocks": len(blocks)})
    return blocks
