from dataclasses import replace
from datetime import datetime, timezone

import pytest

from kubecommon.condition_types import (
    ERROR_REASON,
    READY_CONDITION,
    READY_INIT_MESSAGE,
    READY_MESSAGE,
    REQUESTED_REASON,
    Condition,
    ConditionStatus,
    Severity,
)
from kubecommon.conditions import (
    Conditions,
    create_list,
    false_condition,
    get_higher_prio_condition,
    has_same_state,
    is_error,
    restore_last_transition_times,
    true_condition,
    unknown_condition,
)


def _utc(year, month, day, hour=10):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def unknown_ready():
    return unknown_condition(READY_CONDITION, REQUESTED_REASON, READY_INIT_MESSAGE)


def true_ready():
    return true_condition(READY_CONDITION, READY_MESSAGE)


def unknown_a():
    return unknown_condition("a", "reason unknownA", "message unknownA")


def false_a():
    return false_condition("a", "reason falseA", Severity.INFO, "message falseA")


def true_a():
    return true_condition("a", "message trueA")


def unknown_b():
    return unknown_condition("b", "reason unknownB", "message unknownB")


def false_b():
    return false_condition("b", "reason falseB", Severity.INFO, "message falseB")


def false_b_error():
    return false_condition("b", "reason falseBError", Severity.ERROR, "message falseBError")


def true_b():
    return true_condition("b", "message trueB")


def false_info():
    return false_condition("falseInfo", "reason falseInfo", Severity.INFO, "message falseInfo")


def false_warning():
    return false_condition(
        "falseWarning", "reason falseWarning", Severity.WARNING, "message falseWarning"
    )


def false_error():
    return false_condition(
        "falseError", "reason falseError", Severity.ERROR, "message falseError"
    )


def same_conditions(actual, expected):
    return len(actual) == len(expected) and all(
        has_same_state(a, e) for a, e in zip(actual, expected)
    )


@pytest.mark.parametrize(
    "extra, want",
    [
        ([None], [unknown_ready]),
        ([unknown_a], [unknown_ready, unknown_a]),
        ([unknown_a, unknown_b], [unknown_ready, unknown_a, unknown_b]),
        ([unknown_b, unknown_a], [unknown_ready, unknown_a, unknown_b]),
        ([unknown_a, unknown_a], [unknown_ready, unknown_a]),
    ],
)
def test_init(extra, want):
    conditions = Conditions([true_condition("foo", "to be removed on Init()")])
    conditions.init(create_list(*(f() if f else None for f in extra)))
    assert same_conditions(conditions, create_list(*(f() for f in want)))


def test_init_without_extra_gives_unknown_ready():
    conditions = Conditions()
    conditions.init()
    assert same_conditions(conditions, create_list(unknown_ready()))
    assert conditions[0].last_transition_time is not None


def test_set():
    conditions = Conditions()
    conditions.init(None)
    assert same_conditions(conditions, create_list(unknown_ready()))

    steps = [
        (None, [unknown_ready()]),
        (unknown_b(), [unknown_ready(), unknown_b()]),
        (unknown_a(), [unknown_ready(), unknown_a(), unknown_b()]),
        (unknown_a(), [unknown_ready(), unknown_a(), unknown_b()]),
        (false_a(), [unknown_ready(), false_a(), unknown_b()]),
        (true_ready(), [true_ready(), false_a(), unknown_b()]),
    ]
    for condition, want in steps:
        conditions.set(condition)
        assert same_conditions(conditions, create_list(*want))

    time1 = _utc(2022, 8, 9)
    time2 = _utc(2022, 8, 10)

    conditions.set(replace(false_b(), last_transition_time=time1))
    assert conditions.get("b").last_transition_time == time1

    conditions.set(replace(false_b(), last_transition_time=time2))
    assert conditions.get("b").last_transition_time == time1


@pytest.mark.parametrize(
    "start, remove_type, expected",
    [
        ([unknown_ready, unknown_a, unknown_b], "a", [unknown_ready, unknown_b]),
        ([unknown_ready, unknown_a, unknown_b], READY_CONDITION, [unknown_a, unknown_b]),
        ([unknown_ready, unknown_a], "b", [unknown_ready, unknown_a]),
        ([], "a", []),
    ],
)
def test_remove(start, remove_type, expected):
    conditions = create_list(*(f() for f in start))
    conditions.remove(remove_type)
    assert same_conditions(conditions, create_list(*(f() for f in expected)))


@pytest.mark.parametrize("start", [[], [unknown_ready, unknown_a, unknown_b]])
def test_reset(start):
    conditions = create_list(*(f() for f in start))
    conditions.reset()
    assert len(conditions) == 0


def test_has_same_state():
    base = false_info()
    assert has_same_state(base, replace(base))
    assert has_same_state(base, replace(base, last_transition_time=_utc(1900, 11, 10, 23)))
    assert not has_same_state(base, replace(base, type="another type"))
    assert not has_same_state(base, replace(base, status=ConditionStatus.TRUE))
    assert not has_same_state(base, replace(base, severity=Severity.WARNING))
    assert not has_same_state(base, replace(base, reason="another reason"))
    assert not has_same_state(base, replace(base, message="another message"))


def test_sort_orders_ready_first_then_by_type():
    conditions = Conditions([true_b(), true_a(), true_ready()])
    conditions.sort()
    assert [c.type for c in conditions] == [READY_CONDITION, "a", "b"]


def test_sort_alphabetical():
    conditions = Conditions([true_b(), true_a()])
    conditions.sort()
    assert [c.type for c in conditions] == ["a", "b"]


def test_get_and_has():
    conditions = Conditions()
    conditions.init(None)
    assert same_conditions(conditions, create_list(unknown_ready()))
    assert conditions.has(READY_CONDITION)
    assert has_same_state(conditions.get(READY_CONDITION), unknown_ready())
    assert conditions.get("notExistingCond") is None
    assert not conditions.has("notExistingCond")

    conditions.set(unknown_a())
    assert conditions.has(READY_CONDITION)
    assert conditions.has("a")
    assert has_same_state(conditions.get("a"), unknown_a())


def test_get_returns_copy():
    conditions = create_list(true_a())
    fetched = conditions.get("a")
    fetched.message = "changed"
    assert conditions.get("a").message == "message trueA"


def test_is_methods():
    conditions = Conditions()
    conditions.init(create_list(true_a(), false_info(), unknown_b()))
    assert same_conditions(
        conditions, create_list(unknown_ready(), true_a(), unknown_b(), false_info())
    )

    assert conditions.is_true("a") is True
    assert conditions.is_true("falseInfo") is False
    assert conditions.is_true("unknownB") is False

    assert conditions.is_false("a") is False
    assert conditions.is_false("falseInfo") is True
    assert conditions.is_false("unknownB") is False

    assert conditions.is_unknown("a") is False
    assert conditions.is_unknown("falseInfo") is False
    assert conditions.is_unknown("unknownB") is True
    assert conditions.is_unknown("b") is True


def test_all_sub_condition_is_true():
    conditions = Conditions()
    conditions.init(None)
    assert same_conditions(conditions, create_list(unknown_ready()))

    steps = [
        (None, True),
        (unknown_b(), False),
        (unknown_a(), False),
        (true_a(), False),
        (true_b(), True),
    ]
    for condition, want in steps:
        conditions.set(condition)
        assert conditions.all_sub_condition_is_true() is want


def test_mark_methods():
    conditions = Conditions()
    conditions.init(None)
    assert same_conditions(conditions, create_list(unknown_ready()))
    assert conditions.get(READY_CONDITION).severity == ""

    conditions.mark_true(READY_CONDITION, READY_MESSAGE)
    assert has_same_state(conditions.get(READY_CONDITION), true_ready())
    assert conditions.get(READY_CONDITION).severity == ""

    conditions.mark_false("falseError", "reason falseError", Severity.ERROR, "message falseError")
    assert has_same_state(conditions.get("falseError"), false_error())

    conditions.mark_true("falseError", "now True")
    assert conditions.get("falseError").severity == ""

    conditions.mark_unknown("a", "reason unknownA", "message unknownA")
    assert has_same_state(conditions.get("a"), unknown_a())


def test_message_formatting_with_args():
    condition = false_condition("x", ERROR_REASON, Severity.ERROR, "error occurred %s", "boom")
    assert condition.message == "error occurred boom"
    assert true_condition("x", "100%").message == "100%"


def test_sort_by_last_transition_time():
    fa = replace(false_a(), last_transition_time=_utc(2020, 8, 9))
    fb = replace(false_b(), last_transition_time=_utc(2020, 8, 10))
    fe = replace(false_error(), last_transition_time=_utc(2020, 8, 11))

    conditions = Conditions()
    conditions.init(create_list(fb, fe, fa))
    conditions.sort_by_last_transition_time()

    assert same_conditions(
        conditions, create_list(unknown_ready(), false_error(), false_b(), false_a())
    )


def test_mirror():
    ta = replace(true_a(), last_transition_time=_utc(2020, 8, 9))
    fb = replace(false_b(), last_transition_time=_utc(2020, 8, 10))

    conditions = Conditions()
    conditions.init(None)
    assert same_conditions(conditions, create_list(unknown_ready()))
    target = conditions.mirror("targetConditon")
    assert target.type == "targetConditon"
    assert has_same_state(replace(target, type=READY_CONDITION), unknown_ready())

    conditions.set(ta)
    assert same_conditions(conditions, create_list(unknown_ready(), true_a()))
    target = conditions.mirror("targetConditon")
    assert has_same_state(replace(target, type=READY_CONDITION), unknown_ready())

    conditions.set(fb)
    assert same_conditions(conditions, create_list(unknown_ready(), true_a(), false_b()))
    target = conditions.mirror("targetConditon")
    assert has_same_state(replace(target, type="b"), false_b())
    assert target.last_transition_time == _utc(2020, 8, 10)

    conditions.set(false_b_error())
    assert same_conditions(
        conditions, create_list(unknown_ready(), true_a(), false_b_error())
    )
    target = conditions.mirror("targetConditon")
    assert has_same_state(replace(target, type="b"), false_b_error())

    conditions.mark_true(READY_CONDITION, READY_MESSAGE)
    conditions.set(unknown_a())
    assert same_conditions(
        conditions, create_list(true_ready(), unknown_a(), false_b_error())
    )
    target = conditions.mirror("targetConditon")
    assert has_same_state(replace(target, type=READY_CONDITION), true_ready())


def test_mirror_empty_returns_none():
    assert Conditions().mirror("target") is None


def test_mirror_invalid_status():
    conditions = Conditions()
    invalid = Condition(type="a", status="FooBar", reason="", severity=Severity.NONE, message="")
    conditions.init(Conditions([invalid]))
    conditions.remove(READY_CONDITION)

    with pytest.raises(ValueError, match=r"has invalid status value 'FooBar'\."):
        conditions.mirror("targetConditon")


def test_is_error():
    assert is_error(None) is False
    assert is_error(false_b_error()) is False
    assert is_error(false_b()) is False
    assert is_error(true_b()) is False
    assert is_error(false_condition("errorReason", ERROR_REASON, Severity.ERROR, "message Error"))


def test_get_higher_prio_condition():
    assert get_higher_prio_condition(None, None) is None

    assert has_same_state(get_higher_prio_condition(unknown_a(), None), unknown_a())
    assert has_same_state(get_higher_prio_condition(None, unknown_a()), unknown_a())
    assert has_same_state(get_higher_prio_condition(unknown_a(), true_a()), unknown_a())
    assert has_same_state(get_higher_prio_condition(false_a(), unknown_a()), false_a())
    assert has_same_state(get_higher_prio_condition(false_a(), true_a()), false_a())
    assert has_same_state(get_higher_prio_condition(false_info(), false_error()), false_error())
    assert has_same_state(
        get_higher_prio_condition(false_warning(), false_error()), false_error()
    )
    assert has_same_state(
        get_higher_prio_condition(false_warning(), false_info()), false_warning()
    )

    warning1 = replace(false_warning(), last_transition_time=_utc(2020, 8, 9), message="warning1")
    warning2 = replace(false_warning(), last_transition_time=_utc(2020, 8, 10), message="warning2")
    assert has_same_state(get_higher_prio_condition(warning1, warning2), warning2)
    assert has_same_state(get_higher_prio_condition(warning2, warning1), warning2)


def test_create_list_skips_none_and_copies():
    original = true_a()
    conditions = create_list(None, original, None)
    assert len(conditions) == 1
    original.message = "changed"
    assert conditions[0].message == "message trueA"


TIME1 = _utc(2022, 8, 9)
TIME2 = _utc(2022, 8, 10)


@pytest.mark.parametrize(
    "changes, want",
    [
        ({"type": "X"}, TIME1),
        ({"status": ConditionStatus.UNKNOWN}, TIME1),
        ({"reason": "reason X"}, TIME1),
        ({"severity": Severity.WARNING}, TIME1),
        ({"message": "message X"}, TIME1),
        ({}, TIME2),
    ],
)
def test_restore_last_transition_times(changes, want):
    test_cond = replace(false_a(), last_transition_time=TIME1)
    conditions = create_list(test_cond)

    saved_cond = replace(test_cond, **changes)
    saved_cond.last_transition_time = TIME2
    saved_conditions = create_list(saved_cond)

    restore_last_transition_times(conditions, saved_conditions)

    assert conditions.get(test_cond.type).last_transition_time == want