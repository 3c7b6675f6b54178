# どこで: `src/imscope/core/__init__.py`。
# 何を: toolkit 非依存のコア（スタック/スコープ/ガード/セル）の公開 API を集約する。
# なぜ: 実装を責務ごとに分割しつつ、利用側の import パスを安定させるため。

from __future__ import annotations

from .cells import RGB, Bool, Date, Float, Int, Str
from .errors import (
    AlreadyRunning,
    DanglingHandle,
    ForeignThread,
    HostCallbackFailed,
    ImscopeError,
    NoActiveFrame,
    NoActiveScope,
    StackConsistency,
    StackFault,
    StackUnderflow,
    WindowCreationError,
)
from .frame_driver import FrameDriver
from .headless import HeadlessToolkit
from .run_guard import RUN_GUARD, RunGuard
from .scope_invoker import ScopeResult, invoke_scope
from .scope_stack import RegionHandle, ScopeStack
from .session import Session, current_region, current_session
from .toolkit import FrameContext, Toolkit

__all__ = [
    "AlreadyRunning",
    "Bool",
    "DanglingHandle",
    "Date",
    "Float",
    "ForeignThread",
    "FrameContext",
    "FrameDriver",
    "HeadlessToolkit",
    "HostCallbackFailed",
    "ImscopeError",
    "Int",
    "NoActiveFrame",
    "NoActiveScope",
    "RGB",
    "RUN_GUARD",
    "RegionHandle",
    "RunGuard",
    "ScopeResult",
    "ScopeStack",
    "Session",
    "StackConsistency",
    "StackFault",
    "StackUnderflow",
    "Str",
    "Toolkit",
    "WindowCreationError",
    "current_region",
    "current_session",
    "invoke_scope",
]
