"""Unit tests for Mode, Logic, Condition and VisibilityPolicy."""

import logging

import pytest

from custom_fields.domain.entities import Condition, Logic, Mode, Operator, VisibilityPolicy
from custom_fields.domain.value_source import LiveValueSource


def _policy(mode: str, logic: str = "all", conditions=None, **extra) -> VisibilityPolicy:
    return VisibilityPolicy.from_config(
        {"mode": mode, "logic": logic, "conditions": conditions, **extra}
    )


# ── Mode / Logic ────────────────────────────────────────────────────


def test_mode_should_show():
    assert Mode.ALWAYS_VISIBLE.should_show(False) is True
    assert Mode.SHOW_IF.should_show(True) is True
    assert Mode.SHOW_IF.should_show(False) is False
    assert Mode.HIDE_UNLESS.should_show(True) is False
    assert Mode.HIDE_UNLESS.should_show(False) is True


def test_mode_requires_conditions():
    assert Mode.ALWAYS_VISIBLE.requires_conditions() is False
    assert Mode.SHOW_IF.requires_conditions() is True
    assert Mode.HIDE_UNLESS.requires_conditions() is True


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("if", Mode.SHOW_IF),
        ("show_when", Mode.SHOW_IF),
        ("UNLESS", Mode.HIDE_UNLESS),
        ("hide_when", Mode.HIDE_UNLESS),
        ("sometimes", Mode.ALWAYS_VISIBLE),
        (None, Mode.ALWAYS_VISIBLE),
        (3, Mode.ALWAYS_VISIBLE),
    ],
)
def test_mode_from_value(raw, expected):
    assert Mode.from_value(raw) is expected


def test_logic_on_empty_and_mixed_results():
    assert Logic.ALL.evaluate([]) is True
    assert Logic.ANY.evaluate([]) is False
    assert Logic.ALL.evaluate([True, False]) is False
    assert Logic.ANY.evaluate([True, False]) is True


def test_logic_from_value_defaults_to_all():
    assert Logic.from_value("or") is Logic.ANY
    assert Logic.from_value("xor") is Logic.ALL
    assert Logic.from_value(None) is Logic.ALL


# ── Condition ───────────────────────────────────────────────────────


def test_condition_missing_dependency_is_none():
    condition = Condition("country", Operator.IS_EMPTY)
    assert condition.evaluate({}) is True


def test_condition_from_config_accepts_field_alias():
    condition = Condition.from_config({"field": "age", "operator": "gt", "value": 18})
    assert condition == Condition("age", Operator.GREATER_THAN, 18)


@pytest.mark.parametrize(
    "raw",
    [
        "country equals US",
        {"operator": "equals", "value": "US"},
        {"field_code": "  ", "operator": "equals"},
        {"field_code": "country", "operator": "matches"},
    ],
)
def test_condition_from_config_rejects_malformed(raw):
    assert Condition.from_config(raw) is None


# ── VisibilityPolicy ────────────────────────────────────────────────


def test_always_visible_ignores_conditions():
    policy = _policy(
        "always", conditions=[{"field_code": "x", "operator": "equals", "value": 1}]
    )
    assert policy.evaluate({}) is True
    assert policy.evaluate({"x": 2}) is True
    assert policy.dependencies() == frozenset()


@pytest.mark.parametrize("mode", ["if", "unless"])
@pytest.mark.parametrize("conditions", [None, []])
def test_conditional_mode_without_conditions_is_hidden(mode, conditions):
    policy = _policy(mode, conditions=conditions)
    assert policy.requires_conditions() is True
    assert policy.evaluate({"anything": 1}) is False


def test_dependencies_are_deduplicated():
    policy = _policy(
        "if",
        logic="any",
        conditions=[
            {"field_code": "age", "operator": "greater_than", "value": 18},
            {"field_code": "age", "operator": "less_than", "value": 65},
        ],
    )
    assert policy.dependencies() == frozenset({"age"})


def test_show_if_scenario():
    policy = _policy(
        "if", conditions=[{"field_code": "country", "operator": "equals", "value": "US"}]
    )
    assert policy.evaluate({"country": "US"}) is True
    assert policy.evaluate({"country": "CA"}) is False
    assert policy.evaluate({}) is False


def test_hide_unless_hides_when_any_condition_is_met():
    policy = _policy(
        "unless",
        logic="any",
        conditions=[
            {"field_code": "role", "operator": "equals", "value": "admin"},
            {"field_code": "role", "operator": "equals", "value": "owner"},
        ],
    )
    assert policy.evaluate({"role": "admin"}) is False
    assert policy.evaluate({"role": "owner"}) is False
    assert policy.evaluate({"role": "viewer"}) is True


def test_all_conditions_are_evaluated_without_short_circuit():
    seen: list[str] = []

    def getter(code: str):
        seen.append(code)
        return None

    policy = _policy(
        "if",
        conditions=[
            {"field_code": "a", "operator": "is_not_empty"},
            {"field_code": "b", "operator": "is_not_empty"},
            {"field_code": "c", "operator": "is_not_empty"},
        ],
    )
    assert policy.evaluate(getter) is False
    assert seen == ["a", "b", "c"]


def test_live_value_source_reads_missing_keys_as_none():
    form_state = {"country": "US"}
    policy = _policy(
        "if", conditions=[{"field_code": "country", "operator": "equals", "value": "US"}]
    )
    source = LiveValueSource(form_state.__getitem__)
    assert policy.evaluate(source) is True
    assert source.get("missing") is None


def test_always_save_round_trips_from_config():
    policy = _policy(
        "if",
        always_save=True,
        conditions=[{"field_code": "x", "operator": "is_checked"}],
    )
    assert policy.always_save is True
    assert policy.always_persist is True
    assert VisibilityPolicy.from_config(policy.to_config()).always_save is True
    assert VisibilityPolicy.from_config({"always_persist": "yes"}).always_save is True


def test_config_round_trip_preserves_behaviour():
    policy = _policy(
        "unless",
        logic="any",
        conditions=[
            {"field_code": "age", "operator": "less_than", "value": 18},
            {"field_code": "tags", "operator": "contains", "value": "vip"},
        ],
    )
    restored = VisibilityPolicy.from_config(policy.to_config())

    assert restored == policy
    samples = [{}, {"age": 10}, {"age": 30}, {"tags": ["vip"]}, {"age": 40, "tags": ["x"]}]
    for values in samples:
        assert restored.evaluate(values) == policy.evaluate(values)


def test_malformed_configuration_never_raises(caplog):
    with caplog.at_level(logging.WARNING):
        policy = VisibilityPolicy.from_config(
            {
                "mode": "if",
                "logic": "sometimes",
                "conditions": [
                    {"field_code": "a", "operator": "equals", "value": 1},
                    {"field_code": "b", "operator": "telepathy"},
                    42,
                ],
            }
        )

    assert policy.logic is Logic.ALL
    assert policy.conditions == (Condition("a", Operator.EQUALS, 1),)
    assert "Dropping malformed visibility condition" in caplog.text
    assert VisibilityPolicy.from_config("garbage") == VisibilityPolicy()
    assert VisibilityPolicy.from_config(None).evaluate({}) is True
