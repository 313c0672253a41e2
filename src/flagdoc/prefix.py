"""Discover the flag prefix distinguishing duplicated config blocks."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from flagdoc.config import FLAG_SEPARATOR


def find_flags_prefix(flags: Sequence[str | None]) -> list[str]:
    """Find the prefix of each flag once their common trailing segments are removed.

    Flags are split on ``.`` and the trailing segments shared by all of them
    are dropped; whatever leading segments remain form the prefix, returned
    with a trailing separator. For example
    ``["distributor.ring.heartbeat-period", "ingester.ring.heartbeat-period"]``
    gives ``["distributor.", "ingester."]``.

    A prefix is ``""`` when its flag is missing, when fewer than two flags are
    available, or when it does not tell its instance apart (empty, or shared
    with another instance).

    Args:
        flags: One representative flag per block instance, None or "" if the
            instance has none.

    Returns:
        One prefix per input flag, in the same order.
    """
    prefixes = [""] * len(flags)
    present = [i for i, flag in enumerate(flags) if flag]
    if len(present) < 2:
        return prefixes

    tokens = {i: flags[i].split(FLAG_SEPARATOR) for i in present}
    min_length = min(len(parts) for parts in tokens.values())

    stripped = 0
    for _ in range(min_length):
        last = {parts[-1] for parts in tokens.values()}
        if len(last) != 1:
            break
        for i in present:
            tokens[i] = tokens[i][:-1]
        stripped += 1

    # Nothing in common: the flags are not copies of the same block.
    if not stripped:
        return prefixes

    for i in present:
        if tokens[i]:
            prefixes[i] = FLAG_SEPARATOR.join(tokens[i]) + FLAG_SEPARATOR

    counts = Counter(prefix for prefix in prefixes if prefix)
    return [prefix if counts[prefix] == 1 else "" for prefix in prefixes]
