"""Annotate duplicated config blocks with their flag prefix and strip it."""

from __future__ import annotations

from flagdoc.config import FLAG_SEPARATOR, PLACEHOLDER
from flagdoc.prefix import find_flags_prefix
from flagdoc.schemas import ConfigBlock, EntryKind
from flagdoc.utils.logging_config import get_logger

logger = get_logger(__name__)


def group_blocks(blocks: list[ConfigBlock]) -> dict[str, list[ConfigBlock]]:
    """Group blocks by name, keeping first-encounter order of groups and members."""
    groups: dict[str, list[ConfigBlock]] = {}
    for block in blocks:
        groups.setdefault(block.name, []).append(block)
    return groups


def annotate_flags_prefix(blocks: list[ConfigBlock]) -> None:
    """Document each duplicated block once by replacing its flag prefix.

    A block type embedded at several paths shows up as several blocks with the
    same name whose flags only differ by prefix. Each of them gets the prefix
    telling it apart in ``flags_prefix``, every copy lists all the prefixes in
    ``flags_prefixes``, and the prefix is replaced by the placeholder in the
    block's flags. Groups where no prefix can be found are left untouched.
    """
    for name, group in group_blocks(blocks).items():
        if len(group) == 1:
            continue

        # The first field of each copy is enough to tell the copies apart.
        flags = []
        for block in group:
            entry = block.first_field()
            flags.append(entry.field_flag if entry is not None else "")

        prefixes = find_flags_prefix(flags)
        found = list(dict.fromkeys(prefix for prefix in prefixes if prefix))
        if not found:
            logger.debug("No flag prefix found for duplicated block", extra={"block": name, "copies": len(group)})
            continue

        for block, prefix in zip(group, prefixes):
            block.flags_prefix = prefix
            block.flags_prefixes = list(found)

    for block in blocks:
        if block.flags_prefix:
            remove_flag_prefix(block, block.flags_prefix)


def remove_flag_prefix(block: ConfigBlock, prefix: str, *, rewrite: bool = True) -> None:
    """Replace ``prefix`` with the placeholder in the flags of ``block``.

    Nested blocks are rewritten too, except below a root block entry: a root
    block owns the naming of its flags.
    """
    for entry in block.entries:
        if entry.kind is EntryKind.BLOCK:
            if entry.block is not None:
                remove_flag_prefix(entry.block, prefix, rewrite=rewrite and not entry.root)
        elif rewrite and prefix and entry.field_flag.startswith(prefix):
            entry.field_flag = PLACEHOLDER + FLAG_SEPARATOR + entry.field_flag[len(prefix):]
