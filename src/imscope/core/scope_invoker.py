# どこで: `src/imscope/core/scope_invoker.py`。
# 何を: 全てのネスト構文（root/horizontal/group/collapsing など）が共有する push → body → pop の手順を提供する。
# なぜ: body が失敗しても pop とリージョンの close を必ず行い、スタックを push 前の深さへ戻すため。

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any

from .errors import HostCallbackFailed, StackConsistency, StackFault
from .session import Session, current_session
from .toolkit import SCOPE_KINDS


class ScopeResult(enum.Enum):
    """スコープ呼び出し 1 回の結果。"""

    # body が最後まで実行された。
    COMPLETED = "completed"
    # body が例外を送出した（ログ済み、スタックは復元済み）。
    BODY_FAILED = "body_failed"
    # toolkit がリージョンを開かなかった（例: 折りたたみ中）。body は呼ばれていない。
    REGION_UNAVAILABLE = "region_unavailable"


def run_in_region(
    session: Session,
    kind: str,
    native: Any,
    body: Callable[..., Any],
    args: tuple[Any, ...] = (),
) -> ScopeResult:
    """開いたリージョン `native` を積み、`body(*args)` を実行してから必ず pop/close する。

    Parameters
    ----------
    session : Session
        現在のセッション。
    kind : str
        リージョン種別（ログと検証用）。
    native : Any
        `Toolkit.open_region` が返したリージョン。
    body : Callable[..., Any]
        ホストの callback。
    args : tuple[Any, ...]
        `body` へ渡す引数。root では FrameContext、それ以外は空。

    Returns
    -------
    ScopeResult
        COMPLETED または BODY_FAILED。

    Raises
    ------
    HostCallbackFailed
        エラー方針が "raise" のとき（pop/close の後に送出する）。
    StackConsistency
        pop したハンドルが push したものと異なる場合。
    """

    stack = session.stack
    depth_before = stack.depth
    handle = stack.push(native, kind=kind)
    result = ScopeResult.COMPLETED
    try:
        body(*args)
    except HostCallbackFailed:
        # 内側のスコープで既に報告済み（"raise" 方針）。包み直さずに外へ流す。
        raise
    except StackFault:
        # コアの不整合はホストの失敗ではない。フックへ渡さずに外へ流す。
        raise
    except Exception as exc:
        result = ScopeResult.BODY_FAILED
        session.report_failure(HostCallbackFailed(kind, exc))
    finally:
        try:
            popped = stack.pop()
            if popped is not handle or stack.depth != depth_before:
                raise StackConsistency(
                    f"UI stack is inconsistent after {kind} scope: "
                    f"expected depth={depth_before}, got depth={stack.depth}, popped={popped!r}"
                )
        finally:
            handle.invalidate()
            session.toolkit.close_region(native)
    return result


def invoke_scope(kind: str, body: Callable[[], Any], **params: Any) -> ScopeResult:
    """現在のリージョンの中に `kind` の子リージョンを開き、`body()` をその中で実行する。

    toolkit がリージョンを開かなかった場合は body を呼ばずに
    `ScopeResult.REGION_UNAVAILABLE` を返す（例外にはしない）。
    """

    if kind not in SCOPE_KINDS:
        raise ValueError(f"未知のスコープ種別です: {kind!r}")
    if not callable(body):
        raise TypeError(f"{kind} には引数なしの関数を渡してください: {body!r}")

    session = current_session()
    parent = session.stack.top()
    native = session.toolkit.open_region(parent.native, kind, params)
    if native is None:
        return ScopeResult.REGION_UNAVAILABLE
    return run_in_region(session, kind, native, body)


__all__ = ["ScopeResult", "invoke_scope", "run_in_region"]
