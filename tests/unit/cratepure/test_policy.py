"""Unit tests for runtime dependency whitelist evaluation."""

from __future__ import annotations

import itertools

import pytest

from cratepure.fetcher import DependencyTreeFetcher
from cratepure.policy import PolicyEvaluator, classify, compute_violations
from cratepure.types import FailureReason
from tests.unit.cratepure.cargo_stub import install, workspace


def test_empty_whitelist_and_no_deps_passes() -> None:
    outcome = classify("alpha", (), ())
    assert outcome.passed
    assert outcome.message == "alpha has no normal dependencies."


def test_no_deps_passes_regardless_of_whitelist() -> None:
    assert classify("server-model", (), ("serde",)).passed


def test_empty_whitelist_reports_full_list() -> None:
    outcome = classify("core-model", ("anyhow", "thiserror"), ())
    assert not outcome.passed
    assert outcome.reason is FailureReason.NO_DEPENDENCIES_EXPECTED_BUT_FOUND
    assert outcome.detail == ("anyhow", "thiserror")


def test_subset_of_whitelist_passes() -> None:
    outcome = classify("server-model", ("serde",), ("serde", "serde_yaml"))
    assert outcome.passed
    assert outcome.allowed == ("serde", "serde_yaml")


def test_violation_set_is_exact_difference() -> None:
    outcome = classify("server-model", ("serde", "tokio", "anyhow"), ("serde", "serde_yaml"))
    assert outcome.reason is FailureReason.WHITELIST_VIOLATION
    assert set(outcome.detail) == {"tokio", "anyhow"}
    assert outcome.allowed == ("serde", "serde_yaml")


def test_violations_collapse_duplicates() -> None:
    assert compute_violations(("tokio", "serde", "tokio"), ("serde",)) == ("tokio",)


def test_names_are_case_sensitive() -> None:
    assert compute_violations(("Serde",), ("serde",)) == ("Serde",)


@pytest.mark.parametrize(
    ("deps", "whitelist"),
    [
        (("serde", "tokio", "log"), ("serde", "serde_yaml")),
        (("serde", "serde_yaml"), ("serde_yaml", "serde", "toml")),
    ],
)
def test_order_does_not_change_outcome(deps: tuple[str, ...], whitelist: tuple[str, ...]) -> None:
    baseline = classify("pkg", deps, whitelist)
    for d, w in itertools.product(itertools.permutations(deps), itertools.permutations(whitelist)):
        outcome = classify("pkg", d, w)
        assert outcome.status == baseline.status
        assert set(outcome.detail) == set(baseline.detail)


def test_evaluator_fetches_runtime_edges(monkeypatch: pytest.MonkeyPatch) -> None:
    install(monkeypatch, workspace("server-model", normal=["serde", "tokio"], dev=["mockall"]))
    evaluator = PolicyEvaluator(DependencyTreeFetcher())

    outcome = evaluator.evaluate("server-model", ("serde", "serde_yaml"))

    assert outcome.reason is FailureReason.WHITELIST_VIOLATION
    assert outcome.detail == ("tokio",)


def test_evaluator_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    install(monkeypatch, workspace("core-model", normal=["anyhow"]))
    evaluator = PolicyEvaluator(DependencyTreeFetcher())

    assert evaluator.evaluate("core-model", ()) == evaluator.evaluate("core-model", ())
