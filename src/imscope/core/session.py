# どこで: `src/imscope/core/session.py`。
# 何を: 1 回の `run()` に対応するセッション（スタック/update 関数/toolkit/エラー方針）と、フレーム中だけ有効な参照を提供する。
# なぜ: 生のグローバル参照ではなく、明示的なセッションを「フレーム中・所有スレッド上」でだけ引けるようにするため。

from __future__ import annotations

import contextlib
import contextvars
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Iterator

from .errors import ForeignThread, HostCallbackFailed, NoActiveFrame
from .scope_stack import RegionHandle, ScopeStack
from .toolkit import FrameContext, Toolkit

_logger = logging.getLogger(__name__)

ERROR_POLICIES: tuple[str, ...] = ("log", "raise")

ErrorHook = Callable[[HostCallbackFailed], None]

_session_var: contextvars.ContextVar[Session | None] = contextvars.ContextVar(
    "imscope_session", default=None
)


def validate_error_policy(policy: str) -> str:
    p = str(policy).strip().lower()
    if p not in ERROR_POLICIES:
        raise ValueError(f"error policy は {ERROR_POLICIES} のいずれかです: got={policy!r}")
    return p


@dataclass(eq=False)
class Session:
    """`run()` 1 回分の状態。`run()` が作り、ループ終了で `close()` される。"""

    app_name: str
    update: Callable[[FrameContext], None]
    toolkit: Toolkit
    on_error: ErrorHook | None = None
    error_policy: str = "log"
    stack: ScopeStack = field(default_factory=ScopeStack)
    owner_thread: int = field(default_factory=threading.get_ident)
    frame_index: int = 0
    failures: int = 0
    closed: bool = False

    def __post_init__(self) -> None:
        self.error_policy = validate_error_policy(self.error_policy)

    def report_failure(self, failure: HostCallbackFailed) -> None:
        """ホスト callback の失敗を記録する。

        既定の "log" 方針ではログとフックの呼び出しだけで戻る（フック自身の例外もログに残して捨てる）。
        "raise" 方針では `failure` を送出する。
        """

        self.failures += 1
        _logger.error(
            "%s (frame=%d)", failure, self.frame_index, exc_info=failure.__cause__
        )
        hook = self.on_error
        if hook is not None:
            if self.error_policy == "raise":
                hook(failure)
            else:
                try:
                    hook(failure)
                except Exception:
                    _logger.exception("on_error hook failed (frame=%d)", self.frame_index)
        if self.error_policy == "raise":
            raise failure

    def close(self) -> None:
        """セッションを終了し、残っているハンドルを無効化する。"""

        if self.closed:
            return
        self.closed = True
        leaked = self.stack.invalidate_all()
        if leaked:
            _logger.error("session closed with %d open scope(s)", leaked)


@contextlib.contextmanager
def session_frame(session: Session) -> Iterator[Session]:
    """1 フレームの間だけ `session` を現在のセッションにする。"""

    token = _session_var.set(session)
    try:
        yield session
    finally:
        _session_var.reset(token)


def active_session() -> Session | None:
    """現在のスレッドでフレーム中のセッションを返す（無ければ None）。"""

    return _session_var.get()


def current_session() -> Session:
    """フレーム中のセッションを返す。

    Raises
    ------
    NoActiveFrame
        フレーム外（開始前/フレーム間/終了後）の場合。
    ForeignThread
        セッションを所有していないスレッドから呼ばれた場合。
    """

    session = _session_var.get()
    if session is None or session.closed:
        raise NoActiveFrame()
    if session.owner_thread != threading.get_ident():
        raise ForeignThread()
    return session


def current_region() -> RegionHandle:
    """現在描画先になっているリージョンのハンドルを返す。"""

    return current_session().stack.top()


__all__ = [
    "ERROR_POLICIES",
    "ErrorHook",
    "Session",
    "active_session",
    "current_region",
    "current_session",
    "session_frame",
    "validate_error_policy",
]
