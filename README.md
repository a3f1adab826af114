# kubecommon

Small helpers for code that manages Kubernetes resources: status condition
lists, environment variable merging, pod anti-affinity rules, pod annotations
and Ansible inventories. The only third-party dependency is PyYAML.

## Modules

### `kubecommon.conditions`

`Conditions` is an ordered list of `Condition` objects. It can be iterated,
indexed and measured with `len()`. The `Ready` condition always comes first
and the rest follow in order of type.

- `init(extra)` empties the list. It then adds an Unknown `Ready` condition and
  copies of any conditions in `extra`.
- `set(condition)` adds a condition or replaces the one of the same type. A
  condition with the same state as the existing one leaves it untouched, so
  the old transition time is kept. A condition with no transition time gets
  the current UTC time, truncated to whole seconds. `None` is ignored.
- `remove`, `reset`, `get` and `has` manage and query the list. `get` returns
  a copy of the condition, or `None`.
- `mark_true`, `mark_false` and `mark_unknown` build a condition and set it.
  The message is a `%`-style format string with optional arguments.
- `is_true` and `is_false` are false when the condition is missing.
  `is_unknown` is true when it is missing.
- `all_sub_condition_is_true()` checks every condition except `Ready`.
- `sort()` restores the default order. `sort_by_last_transition_time()` puts
  the latest condition first.
- `mirror(condition_type)` returns a condition of the given type that sums up
  the list:
  - If `Ready` is True, that condition is mirrored.
  - Otherwise the latest condition of the most severe group is mirrored. The
    groups rank in this order: False/Error, False/Warning, False/Info,
    Unknown, True.
  - It raises `ValueError` if the chosen condition has an invalid status.

Module-level functions:

- `true_condition`, `false_condition` and `unknown_condition` build single
  conditions.
- `create_list(*conditions)` copies the given conditions into a new list,
  skipping `None`.
- `has_same_state(a, b)` compares type, status, reason, severity and message.
- `is_error(condition)` is true for a False condition whose reason is `Error`
  or `BackoffLimitExceeded`.
- `get_higher_prio_condition(a, b)` returns the more severe condition. On a
  tie it returns the one with the later transition time.
- `restore_last_transition_times(conditions, saved)` copies transition times
  from saved conditions whose state has not changed.

### `kubecommon.condition_types`

This module holds the `Condition` dataclass and the `Severity` and
`ConditionStatus` string enums. It also defines the well-known names as
constants:

- condition types, such as `READY_CONDITION` and `DB_READY_CONDITION`;
- reasons, such as `ERROR_REASON` and `REQUESTED_REASON`;
- messages, such as `READY_INIT_MESSAGE` and `DB_READY_ERROR_MESSAGE`.

### `kubecommon.env`

- `EnvVar`, `EnvVarSource` and `ObjectFieldSelector` are dataclasses for
  container environment variables.
- `set_value(value)` returns a setter that assigns a literal value.
- `downward_api(field)` returns a setter that takes the value from a pod
  field, for example `status.podIP`.
- `merge_envs(envs, setters)` applies a mapping of name to setter in key
  order. It updates matching variables and appends missing ones. The list is
  changed in place and also returned.
- `sort_setter_map_by_key` returns the `(name, setter)` pairs sorted by name.

### `kubecommon.affinity`

`distribute_pods(selector_key, selector_values, topology_key)` returns a
preferred pod anti-affinity rule as a plain dictionary, with weight 100. It
uses the Kubernetes field names.

### `kubecommon.annotations`

- `get_nad_annotation(namespace, nads)` returns the
  `k8s.v1.cni.cncf.io/networks` annotation. Its value is a compact JSON list
  of `{"Name": ..., "Namespace": ...}` objects.
- `get_bool_from_annotation(annotations, key)` returns `(value, exists)`. A
  missing key gives `(False, False)`. It accepts `1`, `t`, `T`, `TRUE`,
  `true`, `True` and their false counterparts. Any other value raises
  `AnnotationValueError`, a subclass of `ValueError`.

### `kubecommon.inventory`

- `Inventory`, `Group` and `Host` are dataclasses for Ansible inventories.
  Build them with `Inventory.add_group`, `Group.add_host` and
  `Group.add_child`.
- `Inventory.to_yaml()` writes YAML with four-space indentation and sorted
  keys. Empty `vars`, `hosts` and `children` are left out.
- `from_yaml(data)` parses a document back into an `Inventory`. It raises
  `InventoryError` (a `ValueError`) when a group, host or section is not a
  mapping.

### `kubecommon.constants`

This module holds the shared label keys (`APP_SELECTOR`, `OWNER_SELECTOR`,
`COMPONENT_SELECTOR`), file names and hash names. `get_dns_cluster_domain()`
returns `"cluster.local"`.

## Installation

```
pip install kubecommon
```

## Examples

```python
from kubecommon.conditions import Conditions
from kubecommon.condition_types import Severity

conds = Conditions()
conds.init(None)
conds.mark_false("DBReady", "Error", Severity.ERROR, "DB create job error occurred %s", "timeout")
summary = conds.mirror("Ready")
print(summary.status, summary.message)
```

```python
from kubecommon.inventory import Inventory

inv = Inventory()
all_group = inv.add_group("all")
all_group.add_host("node1").vars["ansible_host"] = "node1.example.com"
print(inv.to_yaml())
```

## What this package does not do

The package never connects to a cluster. It does not create, patch, fetch or
delete any resource; it only builds and inspects plain Python objects and
dictionaries. Applying them to a cluster is left to the caller's own client.
There is no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```