import re

import pytest

from e2eframework.config import Config
from e2eframework.features import (
    Feature,
    FeatureBuilder,
    Level,
    Step,
    Table,
    TableEntry,
    filter_steps_by_name,
    get_steps_by_level,
)


def _noop(ctx, t, cfg):
    return ctx


def _run(feature, ctx=None):
    cfg = Config()
    for level in (Level.SETUP, Level.ASSESS, Level.TEARDOWN):
        for step in get_steps_by_level(feature.steps, level):
            ctx = step.fn(ctx, None, cfg)
    return ctx


def test_new():
    feature = FeatureBuilder("test-feat").feature()
    assert isinstance(feature, Feature)
    assert feature.name == "test-feat"


def test_empty_feature():
    feature = FeatureBuilder("empty").feature()
    assert len(feature.labels) == 0
    assert feature.steps == []


def test_with_labels():
    feature = (
        FeatureBuilder("test")
        .with_label("a", "a")
        .with_label("a", "aa")
        .with_label("b", "b")
        .feature()
    )
    assert len(feature.labels) == 2
    assert feature.labels["a"] == ["a", "aa"]
    assert feature.labels["b"] == ["b"]
    assert feature.labels.contains("a", "aa")


def test_one_setup():
    feature = FeatureBuilder("test").setup(_noop).feature()
    setups = get_steps_by_level(feature.steps, Level.SETUP)
    assert len(setups) == 1
    assert len(feature.steps) == 1
    assert setups[0].name == "test-setup"


def test_multiple_setups():
    feature = FeatureBuilder("test").setup(_noop).setup(_noop).feature()
    assert len(get_steps_by_level(feature.steps, Level.SETUP)) == 2
    assert len(feature.steps) == 2


def test_named_setups():
    feature = FeatureBuilder("test").with_setup("setup-test", _noop).feature()
    setups = get_steps_by_level(feature.steps, Level.SETUP)
    assert setups[0].name == "setup-test"


def test_one_teardown():
    feature = FeatureBuilder("test").teardown(_noop).feature()
    teardowns = get_steps_by_level(feature.steps, Level.TEARDOWN)
    assert len(teardowns) == 1
    assert len(feature.steps) == 1
    assert teardowns[0].name == "test-teardown"


def test_multiple_teardowns():
    feature = FeatureBuilder("test").teardown(_noop).teardown(_noop).feature()
    assert len(get_steps_by_level(feature.steps, Level.TEARDOWN)) == 2
    assert len(feature.steps) == 2


def test_named_teardowns():
    feature = FeatureBuilder("test").with_teardown("teardown-test", _noop).feature()
    teardowns = get_steps_by_level(feature.steps, Level.TEARDOWN)
    assert teardowns[0].name == "teardown-test"


def test_single_assessment():
    feature = FeatureBuilder("test").assess("Some test", _noop).feature()
    assessments = get_steps_by_level(feature.steps, Level.ASSESS)
    assert len(assessments) == 1
    assert len(feature.steps) == 1
    assert assessments[0].name == "Some test"


def test_multiple_assessments():
    feature = (
        FeatureBuilder("test").assess("some test", _noop).assess("some tests 2", _noop).feature()
    )
    assert len(get_steps_by_level(feature.steps, Level.ASSESS)) == 2
    assert len(feature.steps) == 2


def test_all_steps_keep_order():
    feature = (
        FeatureBuilder("test")
        .setup(_noop)
        .assess("some tests 2", _noop)
        .assess("some tests 3", _noop)
        .teardown(_noop)
        .feature()
    )
    assert len(feature.steps) == 4
    assert [s.level for s in feature.steps] == [
        Level.SETUP,
        Level.ASSESS,
        Level.ASSESS,
        Level.TEARDOWN,
    ]


def test_with_step_stores_function():
    feature = FeatureBuilder("f").with_step("custom", Level.ASSESS, _noop).feature()
    assert feature.steps == [Step("custom", Level.ASSESS, _noop)]


def test_get_steps_by_level_none():
    assert get_steps_by_level(None, Level.SETUP) is None


def test_filter_steps_by_name():
    steps = [
        Step("volume test", Level.ASSESS, _noop),
        Step("network test", Level.ASSESS, _noop),
        Step("volume cleanup", Level.TEARDOWN, _noop),
    ]
    result = filter_steps_by_name(steps, re.compile("volume"))
    assert [s.name for s in result] == ["volume test", "volume cleanup"]
    assert [s.name for s in filter_steps_by_name(steps, "^net")] == ["network test"]
    assert filter_steps_by_name(None, "x") is None


def _hello(name):
    return f"Hello {name}"


def test_hello():
    results = []

    def check(ctx, t, cfg):
        results.append(_hello("foo"))
        return ctx

    feature = (
        FeatureBuilder("Hello Feature").with_label("type", "simple").assess("test message", check)
    ).feature()
    _run(feature)
    assert results == ["Hello foo"]
    assert feature.labels == {"type": ["simple"]}


def test_hello_with_setup():
    state = {}
    results = []

    def setup(ctx, t, cfg):
        state["name"] = "foobar"
        return ctx

    def check(ctx, t, cfg):
        results.append(_hello(state["name"]))
        return ctx

    feature = (
        FeatureBuilder("Hello Feature")
        .with_label("type", "simple")
        .setup(setup)
        .assess("test message", check)
        .feature()
    )
    assert [s.name for s in feature.steps] == ["Hello Feature-setup", "test message"]
    assert [s.level for s in feature.steps] == [Level.SETUP, Level.ASSESS]
    assert feature.labels == {"type": ["simple"]}
    assert _run(feature, "ctx") == "ctx"
    assert results == ["Hello foobar"]


def test_steps_pass_context_along():
    feature = (
        FeatureBuilder("ctx")
        .setup(lambda ctx, t, cfg: ctx + ["setup"])
        .assess("a", lambda ctx, t, cfg: ctx + ["assess"])
        .teardown(lambda ctx, t, cfg: ctx + ["teardown"])
        .feature()
    )
    assert _run(feature, []) == ["setup", "assess", "teardown"]


def test_table_build():
    table = Table(
        [
            TableEntry("first", _noop),
            TableEntry("", _noop),
            TableEntry("skipped", None),
            TableEntry(assessment=_noop),
        ]
    )
    feature = table.build("table feature").feature()
    assert feature.name == "table feature"
    assert [s.name for s in feature.steps] == ["first", "Assessment-1", "Assessment-3"]
    assert all(s.level is Level.ASSESS for s in feature.steps)


def test_table_build_default_name():
    feature = Table([TableEntry("x", _noop)]).build().feature()
    assert feature.name == ""
    assert len(feature.steps) == 1


@pytest.mark.parametrize("level", [Level.SETUP, Level.ASSESS, Level.TEARDOWN])
def test_levels_are_distinct(level):
    feature = FeatureBuilder("f").with_step("s", level, _noop).feature()
    others = [lv for lv in Level if lv is not level]
    assert len(get_steps_by_level(feature.steps, level)) == 1
    assert all(get_steps_by_level(feature.steps, lv) == [] for lv in others)