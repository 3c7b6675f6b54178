# どこで: `src/imscope/interactive/window_loop.py`。
# 何を: pyglet のウィンドウを `pyglet.app.run()` で回す最小ランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せ、手動 `dispatch_events()` 由来の入力取りこぼしを避けるため。

from __future__ import annotations

from typing import Any, Callable

import pyglet


class WindowLoop:
    """1 つのウィンドウを、閉じられるまで一定のフレームレートで描画する。

    `draw_frame()` は back buffer へ描画するだけにし、`flip()` は pyglet が行う。
    """

    def __init__(self, window: Any, draw_frame: Callable[[], None], *, fps: float) -> None:
        """ループを初期化する。

        Parameters
        ----------
        window : Any
            pyglet の Window。
            注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
        draw_frame : Callable[[], None]
            1 フレーム分の描画処理。`switch_to()` / `flip()` は pyglet（`Window.draw()`）が担当する。
        fps : float
            目標フレームレート。`<=0` の場合はスロットリングしない。
            `>0` の場合、`pyglet.clock.schedule_interval` で描画頻度を制御する。
        """

        self._window = window
        self._draw_frame = draw_frame
        self._fps = float(fps)

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。

        `draw_frame()` が送出した例外はループを止めて呼び出し元へ伝播する。
        """

        window = self._window

        def request_exit(*_: object) -> None:
            # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            pyglet.app.exit()

        window.push_handlers(on_close=request_exit)
        window.push_handlers(on_draw=self._draw_frame)

        # Window.draw は switch_to / on_draw / on_refresh / flip をまとめて行う。
        def draw(dt: float) -> None:
            # 閉じられたウィンドウへ draw すると例外になり得るため、開いているときだけ描く。
            if window not in pyglet.app.windows:
                return
            window.draw(dt)

        if self._fps <= 0:
            pyglet.clock.schedule(draw)
        else:
            pyglet.clock.schedule_interval(draw, 1.0 / float(self._fps))

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(draw)
