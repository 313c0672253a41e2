"""Serialize a configuration tree as JSON or an indented listing."""

from __future__ import annotations

import json
from typing import Iterable

from flagdoc.schemas import ConfigBlock, ConfigEntry, EntryKind


def format_json(blocks: list[ConfigBlock], *, indent: int | None = 2) -> str:
    """Dump the blocks as a JSON array, nested blocks inline."""
    return json.dumps([block.model_dump(mode="json") for block in blocks], indent=indent)


def format_tree(blocks: list[ConfigBlock]) -> str:
    """Render the blocks as an indented listing with flags, types and defaults."""
    sections: list[str] = [_format_summary(blocks)]
    for block in blocks:
        lines = [_block_heading(block)]
        lines.extend(_create_entries_tree(block.entries, indent=1))
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def count_fields(entries: Iterable[ConfigEntry]) -> int:
    """Count field entries, including those of nested non-root blocks."""
    total = 0
    for entry in entries:
        if entry.kind is EntryKind.FIELD:
            total += 1
        elif entry.block is not None and not entry.root:
            total += count_fields(entry.block.entries)
    return total


def _format_summary(blocks: list[ConfigBlock]) -> str:
    roots = [block for block in blocks if block.root]
    summary_lines = [
        f"Root blocks: {len(roots)}",
        f"Fields: {sum(count_fields(block.entries) for block in blocks)}",
    ]
    duplicated = sorted({block.name for block in blocks if block.flags_prefixes})
    if duplicated:
        summary_lines.append(f"Deduplicated blocks: {', '.join(duplicated)}")
    return "\n".join(summary_lines)


def _block_heading(block: ConfigBlock) -> str:
    heading = block.name or "(top level)"
    if block.flags_prefix:
        heading += f" [prefix: {block.flags_prefix}]"
    if block.description:
        heading += f" - {block.description}"
    return heading


def _create_entries_tree(entries: list[ConfigEntry], indent: int) -> list[str]:
    lines: list[str] = []
    pad = " " * (indent * 4)
    for entry in entries:
        if entry.kind is EntryKind.BLOCK:
            if entry.root and entry.block is not None:
                lines.append(f"{pad}{entry.name}: <{entry.block.name}>")
                continue
            lines.append(f"{pad}{entry.name}:")
            if entry.block is not None:
                lines.extend(_create_entries_tree(entry.block.entries, indent + 1))
            continue

        line = f"{pad}{entry.name} ({entry.field_type})"
        if entry.field_flag:
            line += f" -{entry.field_flag}"
        if entry.field_default:
            line += f" = {entry.field_default}"
        lines.append(line)
    return lines
