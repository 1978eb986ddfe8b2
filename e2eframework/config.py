"""Configuration for a test environment."""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .flags import LabelsMap, parse


@dataclass
class Config:
    """Environment configuration; ``with_*`` methods update it and return it."""

    client: Any = None
    kubeconfig: str = ""
    namespace: str = ""
    assessment_regex: re.Pattern[str] | None = None
    feature_regex: re.Pattern[str] | None = None
    labels: LabelsMap = field(default_factory=LabelsMap)
    skip_feature_regex: re.Pattern[str] | None = None
    skip_labels: LabelsMap = field(default_factory=LabelsMap)
    skip_assessment_regex: re.Pattern[str] | None = None
    parallel_tests: bool = False
    dry_run: bool = False
    fail_fast: bool = False
    disable_graceful_teardown: bool = False
    kube_context: str = ""

    def with_kubeconfig_file(self, kubeconfig: str) -> Config:
        self.kubeconfig = kubeconfig
        return self

    def with_client(self, client: Any) -> Config:
        self.client = client
        return self

    def with_namespace(self, ns: str) -> Config:
        self.namespace = ns
        return self

    def with_random_namespace(self) -> Config:
        """Set the namespace to a freshly generated random name."""
        self.namespace = random_name("testns-", 32)
        return self

    def with_assessment_regex(self, regex: str) -> Config:
        self.assessment_regex = re.compile(regex)
        return self

    def with_skip_assessment_regex(self, regex: str) -> Config:
        self.skip_assessment_regex = re.compile(regex)
        return self

    def with_feature_regex(self, regex: str) -> Config:
        self.feature_regex = re.compile(regex)
        return self

    def with_skip_feature_regex(self, regex: str) -> Config:
        self.skip_feature_regex = re.compile(regex)
        return self

    def with_labels(self, labels: Mapping[str, Sequence[str]]) -> Config:
        self.labels = LabelsMap({key: list(values) for key, values in labels.items()})
        return self

    def with_skip_labels(self, labels: Mapping[str, Sequence[str]]) -> Config:
        self.skip_labels = LabelsMap({key: list(values) for key, values in labels.items()})
        return self

    def with_parallel_test_enabled(self) -> Config:
        self.parallel_tests = True
        return self

    def with_dry_run_mode(self) -> Config:
        self.dry_run = True
        return self

    def with_fail_fast(self) -> Config:
        self.fail_fast = True
        return self

    def with_disable_graceful_teardown(self) -> Config:
        self.disable_graceful_teardown = True
        return self

    def with_kube_context(self, kube_context: str) -> Config:
        self.kube_context = kube_context
        return self


def _compile_or_none(pattern: str) -> re.Pattern[str] | None:
    return re.compile(pattern) if pattern else None


def new_with_kubeconfig(kubeconfig: str) -> Config:
    """Create a configuration that points at *kubeconfig*."""
    return Config().with_kubeconfig_file(kubeconfig)


def new_from_flags(argv: Sequence[str] | None = None) -> Config:
    """Create a configuration from command-line flags.

    Raises :class:`~e2eframework.flags.FlagError` if the flags are invalid
    and :class:`re.error` if a given pattern does not compile.
    """
    flags = parse(argv)
    return Config(
        kubeconfig=flags.kubeconfig,
        namespace=flags.namespace,
        assessment_regex=_compile_or_none(flags.assess),
        feature_regex=_compile_or_none(flags.feature),
        labels=flags.labels,
        skip_feature_regex=_compile_or_none(flags.skip_features),
        skip_labels=flags.skip_labels,
        skip_assessment_regex=_compile_or_none(flags.skip_assessment),
        parallel_tests=flags.parallel,
        dry_run=flags.dry_run,
        fail_fast=flags.fail_fast,
        disable_graceful_teardown=flags.disable_graceful_teardown,
        kube_context=flags.kube_context,
    )


def random_name(prefix: str = "", n: int = 32) -> str:
    """Return a random name of length *n* that starts with *prefix*.

    A length of 0 means 32. A prefix at least *n* long is returned as is.
    """
    if n == 0:
        n = 32
    if len(prefix) >= n:
        return prefix
    return f"{prefix}-{secrets.token_hex(n)}"[:n]