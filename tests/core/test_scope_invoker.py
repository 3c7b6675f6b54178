"""core.scope_invoker（push → body → pop）をヘッドレス toolkit でテスト。"""

from __future__ import annotations

import logging
from typing import Any, Callable

import pytest

from imscope.api.scopes import collapsing, group, horizontal, indent, vertical
from imscope.api.widgets import label
from imscope.core.errors import DanglingHandle, HostCallbackFailed, StackConsistency
from imscope.core.frame_driver import FrameDriver
from imscope.core.headless import HeadlessToolkit
from imscope.core.run_guard import RunGuard
from imscope.core.scope_invoker import ScopeResult, invoke_scope
from imscope.core.session import Session, current_region, current_session
from imscope.core.toolkit import FrameContext


def _tick(
    update: Callable[[FrameContext], Any],
    toolkit: HeadlessToolkit | None = None,
    **session_kwargs: Any,
) -> tuple[Session, HeadlessToolkit, ScopeResult]:
    tk = HeadlessToolkit() if toolkit is None else toolkit
    session = Session(app_name="test", update=update, toolkit=tk, **session_kwargs)
    guard = RunGuard()
    with guard.hold():
        result = FrameDriver(session, guard=guard).tick(1.0 / 60.0)
    return session, tk, result


def _depth() -> int:
    return current_session().stack.depth


def test_scope_body_runs_one_level_deeper_and_restores_depth() -> None:
    seen: list[int] = []
    results: list[ScopeResult] = []

    def update(frame: FrameContext) -> None:
        seen.append(_depth())
        results.append(horizontal(lambda: seen.append(_depth())))
        seen.append(_depth())

    session, tk, result = _tick(update)

    assert result is ScopeResult.COMPLETED
    assert seen == [1, 2, 1]
    assert results == [ScopeResult.COMPLETED]
    assert session.stack.depth == 0
    assert tk.open_depth == 0


def test_failing_body_is_reported_and_depth_is_restored(caplog: pytest.LogCaptureFixture) -> None:
    after: list[int] = []
    results: list[ScopeResult] = []

    def body() -> None:
        label("before failure")
        raise ZeroDivisionError("division by zero")

    def update(frame: FrameContext) -> None:
        results.append(horizontal(body))
        after.append(_depth())
        label("after failure")

    with caplog.at_level(logging.ERROR, logger="imscope"):
        session, tk, result = _tick(update)

    assert results == [ScopeResult.BODY_FAILED]
    assert after == [1]
    assert result is ScopeResult.COMPLETED
    assert session.failures == 1
    assert tk.texts() == ["before failure", "after failure"]
    assert tk.open_depth == 0
    assert "horizontal callback threw an error" in caplog.text
    assert "ZeroDivisionError" in caplog.text


def test_failure_deep_in_nested_scopes_unwinds_every_level() -> None:
    results: dict[str, ScopeResult] = {}

    def innermost() -> None:
        raise KeyError("missing")

    def update(frame: FrameContext) -> None:
        def level2() -> None:
            results["indent"] = indent(innermost)

        def level1() -> None:
            results["group"] = group(level2)

        results["vertical"] = vertical(level1)

    session, tk, _ = _tick(update)

    assert results == {
        "indent": ScopeResult.BODY_FAILED,
        "group": ScopeResult.COMPLETED,
        "vertical": ScopeResult.COMPLETED,
    }
    assert session.stack.depth == 0
    opens = [kind for ev, kind in tk.events if ev == "open"]
    closes = [kind for ev, kind in tk.events if ev == "close"]
    assert opens == ["root", "vertical", "group", "indent"]
    assert closes == ["indent", "group", "vertical", "root"]


def test_collapsed_region_skips_body() -> None:
    called: list[str] = []
    results: list[ScopeResult] = []

    def update(frame: FrameContext) -> None:
        results.append(collapsing("Closed", lambda: called.append("closed")))
        results.append(collapsing("Open", lambda: called.append("open")))
        results.append(collapsing("Default", lambda: called.append("default"), default_open=True))

    session, tk, _ = _tick(update, HeadlessToolkit(open_sections=["Open"]))

    assert results == [
        ScopeResult.REGION_UNAVAILABLE,
        ScopeResult.COMPLETED,
        ScopeResult.COMPLETED,
    ]
    assert called == ["open", "default"]
    assert session.failures == 0
    assert ("collapsed", "Closed") in tk.events
    assert [c.args for c in tk.drawn("collapsing_header")] == [("Closed",), ("Open",), ("Default",)]


def test_non_callable_body_is_rejected() -> None:
    errors: list[BaseException] = []

    def update(frame: FrameContext) -> None:
        try:
            horizontal(None)  # type: ignore[arg-type]
        except TypeError as exc:
            errors.append(exc)

    _tick(update)
    assert len(errors) == 1


def test_raise_policy_propagates_after_unwinding() -> None:
    def update(frame: FrameContext) -> None:
        horizontal(lambda: indent(lambda: 1 / 0))

    tk = HeadlessToolkit()
    session = Session(app_name="test", update=update, toolkit=tk, error_policy="raise")
    guard = RunGuard()
    with guard.hold():
        with pytest.raises(HostCallbackFailed) as exc_info:
            FrameDriver(session, guard=guard).tick(0.0)

    assert exc_info.value.scope_kind == "indent"
    assert isinstance(exc_info.value.__cause__, ZeroDivisionError)
    # 内側で 1 回だけ報告され、外側で包み直されない。
    assert session.failures == 1
    assert session.stack.depth == 0
    assert tk.open_depth == 0
    assert session.frame_index == 1


def test_error_hook_receives_failure() -> None:
    failures: list[HostCallbackFailed] = []

    def update(frame: FrameContext) -> None:
        group(lambda: int("not a number"))

    session, _, _ = _tick(update, on_error=failures.append)

    assert [f.scope_kind for f in failures] == ["group"]
    assert isinstance(failures[0].__cause__, ValueError)


def test_region_handle_is_dangling_after_its_scope_ends() -> None:
    captured = []

    def update(frame: FrameContext) -> None:
        horizontal(lambda: captured.append(current_region()))

    _tick(update)

    handle = captured[0]
    assert handle.kind == "horizontal"
    assert handle.alive is False
    with pytest.raises(DanglingHandle):
        _ = handle.native


def test_stack_fault_from_leaked_push_is_not_reported_to_host() -> None:
    failures: list[HostCallbackFailed] = []

    def leak() -> None:
        current_session().stack.push(object(), kind="leak")

    def update(frame: FrameContext) -> None:
        horizontal(leak)

    tk = HeadlessToolkit()
    session = Session(app_name="test", update=update, toolkit=tk, on_error=failures.append)
    guard = RunGuard()
    with guard.hold():
        with pytest.raises(StackConsistency):
            FrameDriver(session, guard=guard).tick(0.0)

    assert failures == []
    assert session.failures == 0


def test_unknown_scope_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        invoke_scope("teleport", lambda: None)
