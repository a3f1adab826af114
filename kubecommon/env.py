"""Container environment variable helpers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

__all__ = [
    "ObjectFieldSelector",
    "EnvVarSource",
    "EnvVar",
    "Setter",
    "merge_envs",
    "set_value",
    "downward_api",
    "sort_setter_map_by_key",
]


@dataclass
class ObjectFieldSelector:
    """Selects a field of the pod."""

    field_path: str = ""


@dataclass
class EnvVarSource:
    """Source for an environment variable's value."""

    field_ref: ObjectFieldSelector | None = None


@dataclass
class EnvVar:
    """A container environment variable."""

    name: str
    value: str = ""
    value_from: EnvVarSource | None = None


Setter = Callable[[EnvVar], None]


def sort_setter_map_by_key(setters: Mapping[str, Setter]) -> list[tuple[str, Setter]]:
    """Return the setters as ``(key, setter)`` pairs sorted by key."""
    return sorted(setters.items(), key=lambda item: item[0])


def merge_envs(envs: list[EnvVar], new_envs: Mapping[str, Setter]) -> list[EnvVar]:
    """Apply setters to ``envs`` in key order, appending variables that are missing.

    The list is updated in place and returned.
    """
    for key, setter in sort_setter_map_by_key(new_envs):
        existing = next((env for env in envs if env.name == key), None)
        if existing is None:
            existing = EnvVar(name=key)
            envs.append(existing)
        setter(existing)
    return envs


def set_value(value: str) -> Setter:
    """Return a setter assigning a literal value."""

    def setter(env: EnvVar) -> None:
        env.value = value
        env.value_from = None

    return setter


def downward_api(field: str) -> Setter:
    """Return a setter taking the value from a pod field, e.g. ``status.podIP``."""

    def setter(env: EnvVar) -> None:
        if env.value_from is None:
            env.value_from = EnvVarSource()
        env.value = ""
        if env.value_from.field_ref is None:
            env.value_from.field_ref = ObjectFieldSelector()
        env.value_from.field_ref.field_path = field

    return setter