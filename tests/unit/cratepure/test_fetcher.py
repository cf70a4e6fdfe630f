"""Unit tests for cargo tree dependency fetching."""

from __future__ import annotations

from pathlib import Path

import pytest

from cratepure.exec import ToolInvocationError
from cratepure.fetcher import DependencyTreeFetcher, build_tree_argv, parse_tree_output
from cratepure.types import DependencyKind
from tests.unit.cratepure.cargo_stub import CargoStub, install, result, tree_argv, workspace


def test_build_tree_argv_depth_one_no_prefix() -> None:
    assert build_tree_argv("server-model", DependencyKind.RUNTIME) == list(tree_argv("server-model", "normal"))
    assert build_tree_argv("server-model", DependencyKind.DEVELOPMENT) == list(tree_argv("server-model", "dev"))


def test_build_tree_argv_forwards_manifest_path() -> None:
    argv = build_tree_argv("alpha", DependencyKind.RUNTIME, cargo="/opt/cargo", manifest_path=Path("ws/Cargo.toml"))
    assert argv[0] == "/opt/cargo"
    assert argv[-2:] == ["--manifest-path", "ws/Cargo.toml"]


def test_fetch_drops_root_line(monkeypatch: pytest.MonkeyPatch) -> None:
    install(monkeypatch, workspace("server-model", normal=["serde", "serde_yaml"], dev=["mockall"]))
    fetcher = DependencyTreeFetcher()

    assert fetcher.fetch("server-model", DependencyKind.RUNTIME) == ("serde", "serde_yaml")
    assert fetcher.fetch("server-model", DependencyKind.DEVELOPMENT) == ("mockall",)


def test_fetch_root_only_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    install(monkeypatch, workspace("alpha"))

    assert DependencyTreeFetcher().fetch("alpha", DependencyKind.RUNTIME) == ()


def test_fetch_is_never_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    stub = install(monkeypatch, workspace("alpha"))
    fetcher = DependencyTreeFetcher()

    fetcher.fetch("alpha", DependencyKind.RUNTIME)
    fetcher.fetch("alpha", DependencyKind.RUNTIME)

    assert stub.calls == [tree_argv("alpha", "normal")] * 2


def test_fetch_raises_on_nonzero_exit(monkeypatch: pytest.MonkeyPatch) -> None:
    argv = tree_argv("nope", "normal")
    stub = CargoStub(
        {argv: result(list(argv), stderr="error: package ID specification `nope` did not match any packages", code=101)}
    )
    install(monkeypatch, stub)

    with pytest.raises(ToolInvocationError, match="did not match any packages") as excinfo:
        DependencyTreeFetcher().fetch("nope", DependencyKind.RUNTIME)
    assert excinfo.value.result is not None
    assert excinfo.value.result.returncode == 101


def test_parse_accepts_versioned_package_spec() -> None:
    out = result(["cargo"], stdout="alpha v0.2.0 (/repo/alpha)\nitoa v1.0.11\n")
    assert parse_tree_output("alpha@0.2.0", out) == ("itoa",)


def test_parse_keeps_duplicates_in_order() -> None:
    out = result(["cargo"], stdout="alpha v0.1.0\nserde v1.0.0\nserde v1.0.0 (*)\n")
    assert parse_tree_output("alpha", out) == ("serde", "serde")


def test_parse_ignores_trailing_blank_lines() -> None:
    out = result(["cargo"], stdout="alpha v0.1.0\nserde v1.0.0\n\n\n")
    assert parse_tree_output("alpha", out) == ("serde",)


def test_parse_rejects_empty_output() -> None:
    with pytest.raises(ToolInvocationError, match="no output"):
        parse_tree_output("alpha", result(["cargo"], stdout=""))


def test_parse_rejects_wrong_root() -> None:
    with pytest.raises(ToolInvocationError, match="root line"):
        parse_tree_output("alpha", result(["cargo"], stdout="beta v0.1.0\n"))


def test_parse_rejects_interior_blank_line() -> None:
    with pytest.raises(ToolInvocationError, match="line 2"):
        parse_tree_output("alpha", result(["cargo"], stdout="alpha v0.1.0\n\nserde v1.0.0\n"))


def test_parse_rejects_indented_tree_prefix() -> None:
    out = result(["cargo"], stdout="alpha v0.1.0\n├── serde v1.0.0\n")
    with pytest.raises(ToolInvocationError, match="unparsable"):
        parse_tree_output("alpha", out)
