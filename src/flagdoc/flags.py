"""CLI flag registration and lookup by bound field identity.

Configuration models expose a ``register_flags(flags)`` method which binds
each CLI flag to a field of a live model instance through
:meth:`FlagSet.bind`. The resulting :class:`FlagRegistry` resolves a field of
that same instance tree back to its flag, so two embeddings of the same model
class resolve to different flags.
"""

from __future__ import annotations

from typing import Any, Iterator, NamedTuple

from pydantic import BaseModel

from flagdoc.exceptions import ConfigStructureError, FlagRegistrationError
from flagdoc.field_utils import field_type_name, format_default
from flagdoc.schemas import FlagInfo
from flagdoc.utils.logging_config import get_logger

logger = get_logger(__name__)

# Marks a flag default left to the owner's current value.
_UNSET: Any = object()


class FieldRef(NamedTuple):
    """Identity of a field on a live model instance."""

    owner_id: int
    field_name: str

    @classmethod
    def of(cls, owner: BaseModel, field_name: str) -> FieldRef:
        return cls(id(owner), field_name)


class FlagRegistry:
    """Read-only lookup from a bound field to its flag metadata.

    The registry holds references to every owner instance so the identities
    it was built from stay valid for as long as it is in use.
    """

    def __init__(
        self,
        bindings: list[tuple[FieldRef, FlagInfo]],
        owners: dict[int, BaseModel],
    ) -> None:
        self._owners = dict(owners)
        self._by_field: dict[FieldRef, FlagInfo] = {}
        for ref, flag in bindings:
            previous = self._by_field.get(ref)
            if previous is not None:
                logger.debug(
                    "Field bound to more than one flag, keeping the last one",
                    extra={"field": ref.field_name, "previous": previous.name, "flag": flag.name},
                )
            self._by_field[ref] = flag

    def lookup(self, owner: BaseModel, field_name: str) -> FlagInfo | None:
        """Return the flag bound to ``owner.field_name``, or None if there is none."""
        return self._by_field.get(FieldRef.of(owner, field_name))

    def __len__(self) -> int:
        return len(self._by_field)

    def __iter__(self) -> Iterator[FlagInfo]:
        return iter(self._by_field.values())


class FlagSet:
    """Collects CLI flags bound to configuration model fields."""

    def __init__(self) -> None:
        self._flags: dict[str, FlagInfo] = {}
        self._bindings: list[tuple[FieldRef, FlagInfo]] = []
        self._owners: dict[int, BaseModel] = {}

    def bind(
        self,
        owner: BaseModel,
        field_name: str,
        name: str,
        usage: str = "",
        default: Any = _UNSET,
    ) -> FlagInfo:
        """Register flag ``name`` for ``owner.field_name``.

        Args:
            owner: Live model instance owning the field.
            field_name: Python name of the field on the owner's model.
            name: Long flag name without leading dashes.
            usage: Help text of the flag.
            default: Default value; the owner's current value when omitted.
                None documents an empty default.

        Returns:
            The registered flag metadata.

        Raises:
            FlagRegistrationError: If the owner is not a model, the field is not
                declared on it, the flag name is empty or already registered,
                or the field type cannot be documented.
        """
        if not isinstance(owner, BaseModel):
            raise FlagRegistrationError(
                f"flag {name!r} must be bound to a model instance, got {type(owner).__name__}"
            )
        info = type(owner).model_fields.get(field_name)
        if info is None:
            raise FlagRegistrationError(
                f"flag {name!r} bound to unknown field {type(owner).__name__}.{field_name}"
            )
        if not name:
            raise FlagRegistrationError(f"empty flag name for {type(owner).__name__}.{field_name}")
        if name in self._flags:
            raise FlagRegistrationError(f"flag redefined: {name}")

        try:
            kind = field_type_name(info.annotation)
        except ConfigStructureError as exc:
            raise FlagRegistrationError(f"flag {name!r}: {exc}") from exc

        value = owner.__dict__.get(field_name) if default is _UNSET else default
        flag = FlagInfo(name=name, usage=usage, default=format_default(value), kind=kind)

        self._flags[name] = flag
        self._bindings.append((FieldRef.of(owner, field_name), flag))
        self._owners[id(owner)] = owner
        return flag

    def flags(self) -> list[FlagInfo]:
        """Return the registered flags in registration order."""
        return list(self._flags.values())

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __len__(self) -> int:
        return len(self._flags)

    def registry(self) -> FlagRegistry:
        return FlagRegistry(self._bindings, self._owners)


def parse_flags(cfg: BaseModel) -> FlagRegistry:
    """Register the flags of ``cfg`` and index them by bound field.

    Raises:
        FlagRegistrationError: If ``cfg`` has no ``register_flags`` method or a
            flag cannot be registered. Other errors raised by the
            registration code propagate unchanged.
    """
    register = getattr(cfg, "register_flags", None)
    if not callable(register):
        raise FlagRegistrationError(f"{type(cfg).__name__} does not define register_flags()")

    flag_set = FlagSet()
    register(flag_set)
    registry = flag_set.registry()
    logger.debug("Registered CLI flags", extra={"config": type(cfg).__name__, "flags": len(registry)})
    return registry
