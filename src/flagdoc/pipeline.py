"""Documentation pipeline: register flags, walk the config, dedupe prefixes."""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel

from flagdoc.dedupe import annotate_flags_prefix
from flagdoc.flags import parse_flags
from flagdoc.schemas import ConfigBlock
from flagdoc.utils.logging_config import get_logger
from flagdoc.walker import RootBlock, parse_config

logger = get_logger(__name__)


def build_config_tree(
    cfg: BaseModel,
    root_blocks: Sequence[RootBlock] = (),
    *,
    require_flags: bool | None = None,
) -> list[ConfigBlock]:
    """Build the documented block tree of a configuration.

    Flags are registered against ``cfg`` so that each field resolves to the
    flag bound to it, then duplicated root blocks get their flag prefix
    replaced by the placeholder.

    Args:
        cfg: Live configuration instance. It must define ``register_flags``.
        root_blocks: Model classes documented as top-level sections.
        require_flags: Fail on fields without a flag. Defaults to
            ``FLAGDOC_REQUIRE_FLAGS``.

    Returns:
        The top-level block followed by the root blocks.

    Raises:
        FlagdocError: If flags cannot be registered or the configuration
            cannot be walked. Nothing is returned in that case.
    """
    flags = parse_flags(cfg)
    blocks = parse_config(cfg, flags, root_blocks, require_flags=require_flags)
    annotate_flags_prefix(blocks)

    logger.info(
        "Built configuration tree",
        extra={
            "config": type(cfg).__name__,
            "flags": len(flags),
            "blocks": len(blocks),
            "prefixed": sum(1 for block in blocks if block.flags_prefix),
        },
    )
    return blocks
