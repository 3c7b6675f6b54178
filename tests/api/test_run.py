"""api.run（セッションの開始/終了とガード）をヘッドレス toolkit でテスト。"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable

import pytest

import imscope as ui
from imscope.core.run_guard import RUN_GUARD
from imscope.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


class BlockingToolkit(ui.HeadlessToolkit):
    """1 フレーム描いた後、`release` が set されるまでループを抜けない toolkit。"""

    def __init__(self) -> None:
        super().__init__(frames=1)
        self.started = threading.Event()
        self.release = threading.Event()

    def run(self, on_frame: Callable[[float], None]) -> None:
        super().run(on_frame)
        self.started.set()
        self.release.wait(timeout=10.0)


def test_run_drives_frames_and_cleans_up() -> None:
    name = ui.Str("world")
    tk = ui.HeadlessToolkit(frames=3)

    def update(frame: ui.FrameContext) -> None:
        ui.heading(f"Hello, {name.value}! #{frame.frame_index}")

    ui.run("demo", update, toolkit=tk)

    assert tk.texts() == ["Hello, world! #0", "Hello, world! #1", "Hello, world! #2"]
    assert tk.images_installed
    assert tk.closed
    assert tk.open_depth == 0
    assert not RUN_GUARD.held


def test_frame_failure_keeps_earlier_widgets_and_next_frame_runs() -> None:
    tk = ui.HeadlessToolkit(frames=2)

    def update(frame: ui.FrameContext) -> None:
        ui.label("A")
        ui.label("B")
        if frame.frame_index == 0:
            raise RuntimeError("first frame fails")
        ui.label("C")

    ui.run("demo", update, toolkit=tk, error_policy="log")

    assert tk.texts(frame=0) == ["A", "B"]
    assert tk.texts(frame=1) == ["A", "B", "C"]
    assert not RUN_GUARD.held


def test_second_run_fails_immediately_while_first_is_open() -> None:
    tk = BlockingToolkit()
    errors: list[BaseException] = []

    def first() -> None:
        try:
            ui.run("first", lambda frame: ui.label("first"), toolkit=tk)
        except BaseException as exc:  # pragma: no cover
            errors.append(exc)

    t = threading.Thread(target=first)
    t.start()
    try:
        assert tk.started.wait(timeout=10.0)
        second = ui.HeadlessToolkit()
        with pytest.raises(ui.AlreadyRunning):
            ui.run("second", lambda frame: ui.label("second"), toolkit=second)
        assert second.calls == []
        assert not second.closed
    finally:
        tk.release.set()
        t.join(timeout=10.0)

    assert errors == []
    assert not RUN_GUARD.held
    # 1 つ目が閉じた後は再び起動できる。
    ui.run("third", lambda frame: None, toolkit=ui.HeadlessToolkit())


def test_raise_policy_propagates_and_releases_guard() -> None:
    tk = ui.HeadlessToolkit(frames=5)

    def update(frame: ui.FrameContext) -> None:
        ui.label("before")
        raise ValueError("boom")

    with pytest.raises(ui.HostCallbackFailed) as exc_info:
        ui.run("demo", update, toolkit=tk, error_policy="raise")

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert exc_info.value.scope_kind == "root"
    assert tk.closed
    assert tk.frame_index == 0
    assert not RUN_GUARD.held


def test_error_policy_from_config_file(tmp_path: Path) -> None:
    config = tmp_path / "imscope.yaml"
    config.write_text("errors:\n  policy: raise\n", encoding="utf-8")

    with pytest.raises(ui.HostCallbackFailed):
        ui.run(
            "demo",
            lambda frame: 1 / 0,
            toolkit=ui.HeadlessToolkit(),
            config_path=config,
        )
    assert not RUN_GUARD.held


def test_on_error_hook_is_called_under_log_policy() -> None:
    seen: list[ui.HostCallbackFailed] = []

    ui.run(
        "demo",
        lambda frame: ui.horizontal(lambda: [][0]),
        toolkit=ui.HeadlessToolkit(frames=2),
        on_error=seen.append,
    )

    assert [f.scope_kind for f in seen] == ["horizontal", "horizontal"]
    assert all(isinstance(f.__cause__, IndexError) for f in seen)


def test_failing_on_error_hook_does_not_end_the_session() -> None:
    tk = ui.HeadlessToolkit(frames=3)
    calls: list[str] = []

    def hook(failure: ui.HostCallbackFailed) -> None:
        calls.append(failure.scope_kind)
        raise KeyError("hook bug")

    def update(frame: ui.FrameContext) -> None:
        ui.label("A")
        ui.horizontal(lambda: 1 / 0)
        ui.label("after")

    ui.run("demo", update, toolkit=tk, on_error=hook)

    assert calls == ["horizontal", "horizontal", "horizontal"]
    assert tk.texts() == ["A", "after"] * 3
    assert not RUN_GUARD.held


def test_update_must_be_callable() -> None:
    with pytest.raises(TypeError):
        ui.run("demo", None, toolkit=ui.HeadlessToolkit())  # type: ignore[arg-type]
    assert not RUN_GUARD.held


def test_widgets_are_unusable_after_run_returns() -> None:
    ui.run("demo", lambda frame: None, toolkit=ui.HeadlessToolkit())
    with pytest.raises(ui.NoActiveFrame):
        ui.label("late")
