"""Command-line flags that configure a test environment."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import NoReturn, Sequence


class FlagError(ValueError):
    """Raised when command-line flags cannot be parsed."""


class LabelsMap(dict[str, list[str]]):
    """Mapping of label keys to every value given for them."""

    def set(self, val: str) -> None:
        """Add the comma-separated ``key=value`` pairs in *val*."""
        for label in val.split(","):
            parts = label.split("=")
            if len(parts) != 2:
                raise FlagError(f"label format error: {label}")
            key, value = (part.strip() for part in parts)
            self.setdefault(key, []).append(value)

    def contains(self, key: str, val: str) -> bool:
        """Tell whether *val* is one of the values recorded for *key*."""
        return val in self.get(key, ())


@dataclass(frozen=True)
class EnvFlags:
    """All resolved flag values for the testing framework."""

    feature: str = ""
    assess: str = ""
    labels: LabelsMap = field(default_factory=LabelsMap)
    kubeconfig: str = ""
    namespace: str = ""
    skip_labels: LabelsMap = field(default_factory=LabelsMap)
    skip_features: str = ""
    skip_assessment: str = ""
    parallel: bool = False
    dry_run: bool = False
    fail_fast: bool = False
    disable_graceful_teardown: bool = False
    kube_context: str = ""


class _FlagParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise FlagError(f"flags parsing: {message}")


_STRING_FLAGS = (
    ("feature", "feature", "Regular expression to select feature(s) to test"),
    ("assess", "assess", "Regular expression to select assessment(s) to run"),
    ("kubeconfig", "kubeconfig", "Path to a cluster kubeconfig file (optional)"),
    ("namespace", "namespace", "A namespace value to use for testing (optional)"),
    ("skip-features", "skip_features", "Regular expression to skip feature(s) to run"),
    ("skip-assessment", "skip_assessment", "Regular expression to skip assessment(s) to run"),
    ("context", "kube_context", "The name of the kubeconfig context to use"),
)

_LABEL_FLAGS = (
    ("labels", "labels", "Comma-separated key=value to filter features by labels"),
    ("skip-labels", "skip_labels", "Regular expression to skip label(s) to run"),
)

_BOOL_FLAGS = (
    ("parallel", "parallel", "Run test features in parallel"),
    (
        "dry-run",
        "dry_run",
        "Run Test suite in dry-run mode. This will list the tests to be "
        "executed without actually running them",
    ),
    ("fail-fast", "fail_fast", "Fail immediately and stop running untested code"),
    (
        "disable-graceful-teardown",
        "disable_graceful_teardown",
        "Ignore panic recovery while running tests. This will prevent test "
        "finish steps from getting executed on panic",
    ),
)


def _build_parser() -> _FlagParser:
    parser = _FlagParser(add_help=False, allow_abbrev=False)
    for name, dest, usage in _STRING_FLAGS:
        parser.add_argument(f"-{name}", f"--{name}", dest=dest, default="", help=usage)
    for name, dest, usage in _LABEL_FLAGS:
        parser.add_argument(
            f"-{name}", f"--{name}", dest=dest, action="append", default=None, help=usage
        )
    for name, dest, usage in _BOOL_FLAGS:
        parser.add_argument(f"-{name}", f"--{name}", dest=dest, action="store_true", help=usage)
    return parser


def _labels_from(values: Sequence[str] | None) -> LabelsMap:
    labels = LabelsMap()
    for value in values or ():
        labels.set(value)
    return labels


def parse_args(args: Sequence[str]) -> EnvFlags:
    """Parse *args* into an :class:`EnvFlags`.

    Raises :class:`FlagError` for unknown flags, missing values or badly
    formed labels, and when ``--fail-fast`` is combined with ``--parallel``.
    """
    namespace = _build_parser().parse_args(list(args))

    if namespace.fail_fast and namespace.parallel:
        raise FlagError("--fail-fast and --parallel are mutually exclusive options")

    return EnvFlags(
        feature=namespace.feature,
        assess=namespace.assess,
        labels=_labels_from(namespace.labels),
        kubeconfig=namespace.kubeconfig,
        namespace=namespace.namespace,
        skip_labels=_labels_from(namespace.skip_labels),
        skip_features=namespace.skip_features,
        skip_assessment=namespace.skip_assessment,
        parallel=namespace.parallel,
        dry_run=namespace.dry_run,
        fail_fast=namespace.fail_fast,
        disable_graceful_teardown=namespace.disable_graceful_teardown,
        kube_context=namespace.kube_context,
    )


def parse(argv: Sequence[str] | None = None) -> EnvFlags:
    """Parse *argv*, or the process arguments when it is omitted."""
    return parse_args(sys.argv[1:] if argv is None else argv)