# どこで: `src/imscope/core/run_guard.py`。
# 何を: プロセス全体で「同時に 1 セッションだけ」を保証する非ブロッキングのガードを提供する。
# なぜ: セッションはウィンドウの寿命だけ続くため、2 つ目の `run()` は待たずに即座に失敗させたい。

from __future__ import annotations

import contextlib
import threading
from typing import Iterator

from .errors import AlreadyRunning


class RunGuard:
    """排他ロックと所有スレッドを組にしたガード。"""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._owner: int | None = None

    @property
    def owner(self) -> int | None:
        """所有スレッドの ident。未取得なら None。"""

        return self._owner

    @property
    def held(self) -> bool:
        return self._lock.locked()

    def held_by_current_thread(self) -> bool:
        return self._owner is not None and self._owner == threading.get_ident()

    def acquire(self) -> None:
        """ガードを取得する。既に取得済みなら待たずに `AlreadyRunning`。"""

        if not self._lock.acquire(blocking=False):
            raise AlreadyRunning(
                f"imscope.run has already been called and its window is still open "
                f"(owner thread={self._owner})"
            )
        self._owner = threading.get_ident()

    def release(self) -> None:
        """ガードを解放する。所有スレッド以外からの解放は `RuntimeError`。"""

        if not self.held_by_current_thread():
            raise RuntimeError("RunGuard.release() called by a thread that does not own it")
        self._owner = None
        self._lock.release()

    @contextlib.contextmanager
    def hold(self) -> Iterator[None]:
        """`with` ブロックの間だけガードを保持する。例外でも必ず解放する。"""

        self.acquire()
        try:
            yield
        finally:
            self.release()


RUN_GUARD = RunGuard()

__all__ = ["RUN_GUARD", "RunGuard"]
