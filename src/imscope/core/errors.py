# どこで: `src/imscope/core/errors.py`。
# 何を: imscope が送出する例外の階層を定義する。
# なぜ: 「利用者の誤用」「ホスト callback の失敗」「コア内部の不変条件違反」を呼び出し側で区別できるようにするため。

from __future__ import annotations

UI_CALL_OUTSIDE_UPDATE_FUNC = (
    "UI functions should be called only within the update function and on the same thread. "
    "The update function should only be called by imscope.run"
)


class ImscopeError(RuntimeError):
    """imscope の全例外の基底。"""


class AlreadyRunning(ImscopeError):
    """別のセッションが実行中に `run()` が呼ばれた。"""


class WindowCreationError(ImscopeError):
    """toolkit がウィンドウを作成できなかった。"""


class NoActiveFrame(ImscopeError):
    """有効なフレームの外（開始前/終了後/別スレッド）で UI 関数が呼ばれた。"""

    def __init__(self, message: str = UI_CALL_OUTSIDE_UPDATE_FUNC) -> None:
        super().__init__(message)


class NoActiveScope(NoActiveFrame):
    """スコープスタックが空の状態で現在のリージョンを要求された。"""


class DanglingHandle(NoActiveFrame):
    """生成元のスコープが既に閉じたリージョンハンドルを参照した。"""


class ForeignThread(NoActiveFrame):
    """セッションを所有していないスレッドから UI 関数が呼ばれた。"""


class StackFault(ImscopeError):
    """スコープスタックの不変条件違反。

    正しい実装では到達しない（到達した場合は imscope 側の不具合）。
    """


class StackUnderflow(StackFault):
    """空のスタックから pop しようとした。"""


class StackConsistency(StackFault):
    """スコープ終了時のスタック状態が push 時と一致しない。"""


class HostCallbackFailed(ImscopeError):
    """ホストが渡した body / update 関数が例外を送出した。

    元の例外は `__cause__` に保持する。
    """

    def __init__(self, scope_kind: str, cause: BaseException) -> None:
        super().__init__(
            f"{scope_kind} callback threw an error: {type(cause).__name__}: {cause}"
        )
        self.scope_kind = str(scope_kind)
        self.__cause__ = cause


__all__ = [
    "AlreadyRunning",
    "DanglingHandle",
    "ForeignThread",
    "HostCallbackFailed",
    "ImscopeError",
    "NoActiveFrame",
    "NoActiveScope",
    "StackConsistency",
    "StackFault",
    "StackUnderflow",
    "UI_CALL_OUTSIDE_UPDATE_FUNC",
    "WindowCreationError",
]
