"""Lists of conditions: setting, querying, ordering and mirroring them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from kubecommon.condition_types import (
    ERROR_REASON,
    JOB_REASON_BACKOFF_LIMIT_EXCEEDED,
    READY_CONDITION,
    READY_INIT_MESSAGE,
    READY_REASON,
    REQUESTED_REASON,
    Condition,
    ConditionStatus,
    Severity,
)

__all__ = [
    "Conditions",
    "has_same_state",
    "true_condition",
    "false_condition",
    "unknown_condition",
    "create_list",
    "is_error",
    "get_higher_prio_condition",
    "restore_last_transition_times",
]

_MIN_TIME = datetime.min.replace(tzinfo=timezone.utc)
_GROUP_COUNT = 6


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def _format(message_format: str, args: tuple[object, ...]) -> str:
    return message_format % args if args else message_format


def _time_key(condition: Condition) -> datetime:
    moment = condition.last_transition_time
    if moment is None:
        return _MIN_TIME
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _not_before(first: Condition, second: Condition) -> bool:
    """True when the first condition's transition time is not before the second's."""
    return not _time_key(first) < _time_key(second)


def _group_order(condition: Condition) -> int:
    if condition.status == ConditionStatus.FALSE:
        order = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}
        return order.get(condition.severity, 5)
    if condition.status == ConditionStatus.UNKNOWN:
        return 3
    if condition.status == ConditionStatus.TRUE:
        return 4
    return 5


class Conditions:
    """An ordered list of conditions, the Ready condition always first."""

    def __init__(self, items: Iterable[Condition] = ()) -> None:
        self._items: list[Condition] = list(items)

    def __iter__(self) -> Iterator[Condition]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Condition:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Conditions):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Conditions({self._items!r})"

    def init(self, extra: Iterable[Condition] | None = None) -> None:
        """Reset the list to an Unknown Ready condition plus any extra conditions."""
        self.reset()
        self.set(unknown_condition(READY_CONDITION, REQUESTED_REASON, READY_INIT_MESSAGE))
        if extra is not None:
            for condition in extra:
                self.set(replace(condition))

    def set(self, condition: Condition | None) -> None:
        """Add or update a condition, keeping its old time when its state is unchanged.

        A condition without a transition time is given the current time.
        """
        if condition is None:
            return
        if condition.last_transition_time is None:
            condition.last_transition_time = _now()

        for index, existing in enumerate(self._items):
            if existing.type == condition.type:
                if not has_same_state(existing, condition):
                    self._items[index] = replace(condition)
                break
        else:
            self._items.append(replace(condition))

        self.sort()

    def remove(self, condition_type: str) -> None:
        """Remove the condition of the given type, if present."""
        self._items = [c for c in self._items if c.type != condition_type]

    def reset(self) -> None:
        """Remove all conditions."""
        self._items = []

    def get(self, condition_type: str) -> Condition | None:
        """Return a copy of the condition of the given type, or None."""
        found = next((c for c in self._items if c.type == condition_type), None)
        return replace(found) if found is not None else None

    def has(self, condition_type: str) -> bool:
        """Whether a condition of the given type exists."""
        return any(c.type == condition_type for c in self._items)

    def mark_true(self, condition_type: str, message_format: str, *args: object) -> None:
        """Set the condition of the given type to Status=True."""
        self.set(true_condition(condition_type, message_format, *args))

    def mark_false(
        self,
        condition_type: str,
        reason: str,
        severity: Severity | str,
        message_format: str,
        *args: object,
    ) -> None:
        """Set the condition of the given type to Status=False."""
        self.set(false_condition(condition_type, reason, severity, message_format, *args))

    def mark_unknown(
        self, condition_type: str, reason: str, message_format: str, *args: object
    ) -> None:
        """Set the condition of the given type to Status=Unknown."""
        self.set(unknown_condition(condition_type, reason, message_format, *args))

    def is_true(self, condition_type: str) -> bool:
        """Whether the condition exists and is True."""
        condition = self.get(condition_type)
        return condition is not None and condition.status == ConditionStatus.TRUE

    def is_false(self, condition_type: str) -> bool:
        """Whether the condition exists and is False."""
        condition = self.get(condition_type)
        return condition is not None and condition.status == ConditionStatus.FALSE

    def is_unknown(self, condition_type: str) -> bool:
        """Whether the condition is Unknown or does not exist."""
        condition = self.get(condition_type)
        return condition is None or condition.status == ConditionStatus.UNKNOWN

    def all_sub_condition_is_true(self) -> bool:
        """Whether every condition other than Ready is True."""
        return all(
            c.status == ConditionStatus.TRUE
            for c in self._items
            if c.type != READY_CONDITION
        )

    def sort(self) -> None:
        """Order the list: Ready first, then the others by type."""
        self._items.sort(key=lambda c: (c.type != READY_CONDITION, c.type))

    def sort_by_last_transition_time(self) -> None:
        """Order the list by transition time, latest first."""
        self._items.sort(key=_time_key, reverse=True)

    def _condition_groups(self) -> list[_ConditionGroup]:
        groups = [_ConditionGroup() for _ in range(_GROUP_COUNT)]
        for condition in self._items:
            match = next(
                (
                    g
                    for g in groups
                    if g.status == condition.status and g.severity == condition.severity
                ),
                None,
            )
            if match is not None:
                match.conditions._items.append(condition)
            else:
                groups[_group_order(condition)] = _ConditionGroup(
                    condition.status, condition.severity, Conditions([condition])
                )
        return groups

    def mirror(self, condition_type: str) -> Condition | None:
        """Return a condition of the given type reflecting the overall state.

        A True Ready condition is mirrored as is. Otherwise the latest
        condition of the most severe group (False by Error, Warning, Info,
        then Unknown, then True) is mirrored. Raises :class:`ValueError` when
        that condition has an invalid status.
        """
        if not self._items:
            return None

        groups = self._condition_groups()

        true_group = groups[_group_order(true_condition(READY_CONDITION, "foo"))]
        if true_group.conditions and true_group.conditions.is_true(READY_CONDITION):
            ready = true_group.conditions.get(READY_CONDITION)
            mirrored = true_condition(condition_type, "%s", ready.message)
            mirrored.last_transition_time = ready.last_transition_time
            return mirrored

        for group in groups:
            if not group.conditions:
                continue
            group.conditions.sort_by_last_transition_time()
            latest = group.conditions[0]

            if latest.status == ConditionStatus.TRUE:
                mirrored = true_condition(condition_type, "%s", latest.message)
            elif latest.status == ConditionStatus.FALSE:
                mirrored = false_condition(
                    condition_type, latest.reason, latest.severity, "%s", latest.message
                )
            elif latest.status == ConditionStatus.UNKNOWN:
                mirrored = unknown_condition(
                    condition_type, latest.reason, "%s", latest.message
                )
            else:
                raise ValueError(
                    f"Condition {latest} has invalid status value '{latest.status}'. "
                    "The only valid values are True, False, Unknown"
                )
            mirrored.last_transition_time = latest.last_transition_time
            return mirrored

        return None


@dataclass
class _ConditionGroup:
    status: str = ""
    severity: str = ""
    conditions: Conditions = field(default_factory=Conditions)


def has_same_state(first: Condition, second: Condition) -> bool:
    """Whether two conditions agree on type, status, reason, severity and message."""
    return (
        first.type == second.type
        and first.status == second.status
        and first.reason == second.reason
        and first.severity == second.severity
        and first.message == second.message
    )


def true_condition(condition_type: str, message_format: str, *args: object) -> Condition:
    """Return a condition with Status=True."""
    return Condition(
        type=condition_type,
        status=ConditionStatus.TRUE,
        reason=READY_REASON,
        severity=Severity.NONE,
        message=_format(message_format, args),
    )


def false_condition(
    condition_type: str,
    reason: str,
    severity: Severity | str,
    message_format: str,
    *args: object,
) -> Condition:
    """Return a condition with Status=False."""
    return Condition(
        type=condition_type,
        status=ConditionStatus.FALSE,
        reason=reason,
        severity=severity,
        message=_format(message_format, args),
    )


def unknown_condition(
    condition_type: str, reason: str, message_format: str, *args: object
) -> Condition:
    """Return a condition with Status=Unknown."""
    return Condition(
        type=condition_type,
        status=ConditionStatus.UNKNOWN,
        reason=reason,
        severity=Severity.NONE,
        message=_format(message_format, args),
    )


def create_list(*args: Condition | None) -> Conditions:
    """Return a list holding copies of the given conditions, skipping None."""
    return Conditions(replace(c) for c in args if c is not None)


def is_error(condition: Condition | None) -> bool:
    """Whether the condition is False for an error or backoff-limit reason."""
    if condition is None:
        return False
    return condition.status == ConditionStatus.FALSE and condition.reason in (
        ERROR_REASON,
        JOB_REASON_BACKOFF_LIMIT_EXCEEDED,
    )


def get_higher_prio_condition(
    first: Condition | None, second: Condition | None
) -> Condition | None:
    """Return the condition of higher priority; on a tie the later one."""
    if first is None:
        return second
    if second is None:
        return first
    first_order = _group_order(first)
    second_order = _group_order(second)
    if first_order < second_order:
        return first
    if first_order == second_order and _not_before(first, second):
        return first
    return second


def restore_last_transition_times(
    conditions: Conditions, saved_conditions: Conditions
) -> None:
    """Copy transition times from saved conditions whose state is unchanged."""
    for condition in conditions:
        saved = saved_conditions.get(condition.type)
        if saved is not None and has_same_state(condition, saved):
            condition.last_transition_time = saved.last_transition_time