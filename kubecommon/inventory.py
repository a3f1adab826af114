"""Ansible inventory model with YAML serialization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


class InventoryError(ValueError):
    """The YAML document does not describe an inventory."""


@dataclass
class Host:
    """An ansible host and its variables."""

    name: str
    vars: dict[str, Any] = field(default_factory=dict)


@dataclass
class Group:
    """An ansible group with variables, hosts and child groups."""

    name: str
    vars: dict[str, Any] = field(default_factory=dict)
    hosts: dict[str, Host] = field(default_factory=dict)
    children: dict[str, Group] = field(default_factory=dict)

    def add_host(self, name: str) -> Host:
        """Add a new host to the group and return it."""
        host = Host(name)
        self.hosts[name] = host
        return host

    def add_child(self, group: Group) -> Group:
        """Add a child group and return it."""
        self.children[group.name] = group
        return group

    def _to_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.vars:
            data["vars"] = _sorted(self.vars)
        if self.hosts:
            data["hosts"] = {
                name: _sorted(self.hosts[name].vars) for name in sorted(self.hosts)
            }
        if self.children:
            data["children"] = {
                name: self.children[name]._to_data() for name in sorted(self.children)
            }
        return data


@dataclass
class Inventory:
    """A parsed inventory: groups keyed by name."""

    groups: dict[str, Group] = field(default_factory=dict)

    def add_group(self, name: str) -> Group:
        """Add a new group to the inventory and return it."""
        group = Group(name)
        self.groups[name] = group
        return group

    def to_yaml(self) -> str:
        """Serialize the inventory to YAML."""
        data = {name: self.groups[name]._to_data() for name in sorted(self.groups)}
        return yaml.dump(
            data,
            indent=4,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _sorted(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, list):
        return [_sorted(item) for item in value]
    return value


def _mapping(value: Any, what: str) -> dict[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InventoryError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _group_from_data(name: str, data: Any) -> Group:
    body = _mapping(data, f"group {name!r}")
    group = Group(name, vars=dict(_mapping(body.get("vars"), f"vars of group {name!r}")))
    for host_name, host_vars in _mapping(body.get("hosts"), f"hosts of group {name!r}").items():
        host_name = str(host_name)
        group.hosts[host_name] = Host(
            host_name, dict(_mapping(host_vars, f"host {host_name!r}"))
        )
    for child_name, child in _mapping(
        body.get("children"), f"children of group {name!r}"
    ).items():
        child_name = str(child_name)
        group.children[child_name] = _group_from_data(child_name, child)
    return group


def from_yaml(data: str | bytes) -> Inventory:
    """Parse a YAML inventory document."""
    document = _mapping(yaml.safe_load(data), "inventory")
    inventory = Inventory()
    for name, body in document.items():
        name = str(name)
        inventory.groups[name] = _group_from_data(name, body)
    return inventory