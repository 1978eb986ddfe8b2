"""Features: named groups of setup, assessment and teardown steps."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .config import Config
from .flags import LabelsMap

StepFunc = Callable[[Any, Any, Config], Any]
"""A step operation: called with a context, a test handle and a config; returns the context."""

Labels = LabelsMap


class Level(enum.IntEnum):
    """Phase of a feature test that a step belongs to."""

    SETUP = 0
    ASSESS = 1
    TEARDOWN = 2


@dataclass(frozen=True)
class Step:
    """A single named operation of a feature, run at a given level."""

    name: str
    level: Level
    fn: StepFunc


@dataclass
class Feature:
    """A testable feature: a name, its labels and its steps in order."""

    name: str
    labels: LabelsMap = field(default_factory=LabelsMap)
    steps: list[Step] = field(default_factory=list)


class FeatureBuilder:
    """Fluent builder for a :class:`Feature`."""

    def __init__(self, name: str = "") -> None:
        self._feature = Feature(name=name)

    def with_label(self, key: str, value: str) -> FeatureBuilder:
        """Add a label value under *key*."""
        self._feature.labels.setdefault(key, []).append(value)
        return self

    def with_step(self, name: str, level: Level, fn: StepFunc) -> FeatureBuilder:
        """Append a step with the given name and level."""
        self._feature.steps.append(Step(name, Level(level), fn))
        return self

    def setup(self, fn: StepFunc) -> FeatureBuilder:
        """Add a setup step named after the feature."""
        return self.with_setup(f"{self._feature.name}-setup", fn)

    def with_setup(self, name: str, fn: StepFunc) -> FeatureBuilder:
        """Add a setup step with an explicit name."""
        return self.with_step(name, Level.SETUP, fn)

    def teardown(self, fn: StepFunc) -> FeatureBuilder:
        """Add a teardown step named after the feature."""
        return self.with_teardown(f"{self._feature.name}-teardown", fn)

    def with_teardown(self, name: str, fn: StepFunc) -> FeatureBuilder:
        """Add a teardown step with an explicit name."""
        return self.with_step(name, Level.TEARDOWN, fn)

    def assess(self, desc: str, fn: StepFunc) -> FeatureBuilder:
        """Add an assessment step described by *desc*."""
        return self.with_step(desc, Level.ASSESS, fn)

    def feature(self) -> Feature:
        """Return the feature configured so far."""
        return self._feature


def get_steps_by_level(steps: Iterable[Step] | None, level: Level) -> list[Step] | None:
    """Return the steps at *level*, in order; ``None`` if *steps* is ``None``."""
    if steps is None:
        return None
    return [step for step in steps if step.level == level]


def filter_steps_by_name(
    steps: Iterable[Step] | None, regex: re.Pattern[str] | str
) -> list[Step] | None:
    """Return the steps whose name matches *regex* anywhere; ``None`` if *steps* is ``None``."""
    if steps is None:
        return None
    pattern = re.compile(regex) if isinstance(regex, str) else regex
    return [step for step in steps if pattern.search(step.name)]


@dataclass
class TableEntry:
    """One row of a :class:`Table`: an assessment and its optional name."""

    name: str = ""
    assessment: StepFunc | None = None


class Table(list[TableEntry]):
    """Table-driven tests: each entry becomes an assessment."""

    def build(self, feature_name: str = "") -> FeatureBuilder:
        """Turn the entries into a builder; unnamed entries become ``Assessment-<index>``."""
        builder = FeatureBuilder(feature_name)
        for index, entry in enumerate(self):
            if entry.assessment is None:
                continue
            builder.assess(entry.name or f"Assessment-{index}", entry.assessment)
        return builder