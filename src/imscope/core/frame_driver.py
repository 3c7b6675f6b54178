# どこで: `src/imscope/core/frame_driver.py`。
# 何を: toolkit の 1 フレーム tick を、root リージョン上の 1 回のスコープ呼び出しへ橋渡しする。
# なぜ: ホストの update 関数を毎フレーム同じ手順（ガード確認 → root push → 実行 → pop）で呼ぶため。

from __future__ import annotations

import logging

from .errors import ForeignThread, StackConsistency
from .run_guard import RUN_GUARD, RunGuard
from .scope_invoker import ScopeResult, run_in_region
from .session import Session, session_frame
from .toolkit import ROOT_KIND, FrameContext

_logger = logging.getLogger(__name__)


class FrameDriver:
    """セッションを所有し、toolkit から毎フレーム呼ばれる。"""

    def __init__(self, session: Session, *, guard: RunGuard = RUN_GUARD) -> None:
        self._session = session
        self._guard = guard

    @property
    def session(self) -> Session:
        return self._session

    def tick(self, dt: float) -> ScopeResult:
        """1 フレーム分の update 関数を実行する。

        update 関数の例外はログに残してフレームを完了させる（既定方針）。
        その時点までに描いたウィジェットはそのまま残る。
        """

        if not self._guard.held_by_current_thread():
            raise ForeignThread(
                "frame driver was called from a thread that did not start imscope.run"
            )

        session = self._session
        frame = FrameContext(
            frame_index=int(session.frame_index),
            dt=float(dt),
            toolkit=session.toolkit,
        )
        with session_frame(session):
            if session.stack.depth != 0:
                raise StackConsistency(
                    f"UI stack is not empty at frame start: {session.stack.kinds()}"
                )
            native = session.toolkit.open_region(None, ROOT_KIND, {})
            if native is None:
                raise StackConsistency("toolkit did not provide a root region")
            try:
                result = run_in_region(
                    session, ROOT_KIND, native, session.update, (frame,)
                )
            finally:
                session.frame_index += 1
            if session.stack.depth != 0:
                raise StackConsistency(
                    f"UI stack is not empty at frame end: {session.stack.kinds()}"
                )
        if result is ScopeResult.BODY_FAILED:
            _logger.debug("frame %d completed after an update failure", frame.frame_index)
        return result


__all__ = ["FrameDriver"]
