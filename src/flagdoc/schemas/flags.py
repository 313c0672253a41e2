"""CLI flag metadata models."""

from __future__ import annotations

from pydantic import BaseModel


class FlagInfo(BaseModel):
    """A registered CLI flag.

    Attributes:
        name: Long flag name without leading dashes (e.g. "ingester.ring.heartbeat-period").
        usage: Help text of the flag.
        default: Default value in string form.
        kind: Type name of the bound field.
    """

    name: str
    usage: str = ""
    default: str = ""
    kind: str = ""
