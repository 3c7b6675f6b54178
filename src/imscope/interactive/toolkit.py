# どこで: `src/imscope/interactive/toolkit.py`。
# 何を: pyglet ウィンドウ上で pyimgui を駆動する Toolkit 実装（初期化/1フレーム描画/破棄）を提供する。
# なぜ: 依存の重いライフサイクル管理を 1 箇所に閉じ込め、コアを GUI ライブラリから独立に保つため。

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .images import TextureCache, TextureLoader
from .pyglet_backend import _create_imgui_pyglet_renderer, _sync_imgui_io_for_window, create_window
from .regions import ImGuiRegion, close_region, open_region
from .widgets import WidgetEnv, render_widget
from .window_loop import WindowLoop

if TYPE_CHECKING:
    from imscope.core.runtime_config import RuntimeConfig

_logger = logging.getLogger(__name__)

_CLEAR_RGBA = (0.12, 0.12, 0.12, 1.0)


class ImGuiToolkit:
    """pyimgui で 1 ウィンドウ全面に UI を描く toolkit。

    `run(on_frame)` の間、毎フレーム ImGui のフレームを開始してから
    `on_frame(dt)` を呼び、戻ったら draw_data を OpenGL へ流す。
    """

    def __init__(
        self,
        window: Any,
        *,
        title: str,
        fps: float = 60.0,
        open_url: Callable[[str], Any] | None = None,
        texture_loader: TextureLoader | None = None,
    ) -> None:
        """ImGui コンテキストと renderer を作成する。"""

        import imgui  # type: ignore[import-untyped]

        # imgui の pyglet backend は環境によって import 経路が揺れるため、明示的にここで解決する。
        try:
            from imgui.integrations import (
                pyglet as imgui_pyglet,  # type: ignore[import-untyped]
            )
        except Exception as exc:
            raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

        self._window = window
        self._title = str(title)
        self._fps = float(fps)
        self._texture_loader = texture_loader

        # ImGui は「グローバルな current context」を前提にするため、自前コンテキストを作って切り替えながら使う。
        self._imgui = imgui
        self._context = imgui.create_context()
        imgui.set_current_context(self._context)
        imgui.style_colors_dark()

        # ImGui の draw_data を実際に OpenGL へ流す renderer を作る。
        self._renderer = _create_imgui_pyglet_renderer(imgui_pyglet, window)

        self._env = WidgetEnv(imgui=imgui)
        if open_url is not None:
            self._env.open_url = open_url

        self._on_frame: Callable[[float], None] | None = None
        self._prev_time = time.monotonic()
        self._closed = False

    # --- Toolkit protocol ---

    def open_region(
        self, parent: ImGuiRegion | None, kind: str, params: Mapping[str, Any]
    ) -> ImGuiRegion | None:
        return open_region(
            self._imgui, parent, kind, params, window=self._window, title=self._title
        )

    def close_region(self, region: ImGuiRegion) -> None:
        close_region(self._imgui, region)

    def draw(self, region: ImGuiRegion, widget: str, *args: Any) -> Any:
        return render_widget(self._env, region, widget, *args)

    def install_image_loaders(self) -> None:
        self._env.textures = TextureCache(self._texture_loader)

    def run(self, on_frame: Callable[[float], None]) -> None:
        """ウィンドウが閉じられるまで `on_frame(dt)` を毎フレーム呼ぶ。"""

        if self._closed:
            raise RuntimeError("toolkit is already closed")
        self._on_frame = on_frame
        self._prev_time = time.monotonic()
        try:
            WindowLoop(self._window, self._draw_frame, fps=self._fps).run()
        finally:
            self._on_frame = None

    def close(self) -> None:
        """GUI を終了し、コンテキストとウィンドウを破棄する。"""

        # 二重 close を許容する（呼び出し側の finally から安全に呼べるようにする）。
        if self._closed:
            return
        self._closed = True

        # backend が持つ GL リソースを破棄し、ImGui context を破棄してから window を閉じる。
        self._env.textures.clear()
        shutdown = getattr(self._renderer, "shutdown", None)
        if callable(shutdown):
            shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()

    # --- 内部 ---

    def _draw_frame(self) -> None:
        """1 フレーム分の UI を描画する。

        `flip()` は呼ばない。`WindowLoop`（pyglet の `Window.draw()`）が担当する。
        """

        on_frame = self._on_frame
        if self._closed or on_frame is None:
            return

        # 前フレームからの経過秒（ImGui の IO とホストの両方に渡す）。
        now = time.monotonic()
        dt = now - self._prev_time
        self._prev_time = now

        imgui = self._imgui
        # 以降の ImGui 呼び出しはこのインスタンスの context を対象にする。
        imgui.set_current_context(self._context)

        # 注: imgui.integrations.pyglet の process_inputs() は内部で pyglet.clock.tick() を呼ぶ。
        # `pyglet.app.run()` 駆動時にこれを呼ぶと clock が二重に進みやすいので、ここでは呼ばない。
        imgui.new_frame()
        _sync_imgui_io_for_window(imgui, self._window, dt=dt)

        # --- ImGui フレーム終了（draw_data 構築）---
        # on_frame が例外を送出しても、開いた ImGui フレームは必ず閉じる。
        try:
            on_frame(dt)
        finally:
            imgui.render()

        import pyglet

        pyglet.gl.glClearColor(*_CLEAR_RGBA)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())


def create_imgui_toolkit(app_name: str, *, config: RuntimeConfig) -> ImGuiToolkit:
    """設定に従ってウィンドウを作り、`ImGuiToolkit` を返す。

    Raises
    ------
    WindowCreationError
        ウィンドウを作れない場合。
    """

    width, height = config.window_size
    window = create_window(
        caption=str(app_name),
        width=width,
        height=height,
        vsync=config.vsync,
        resizable=config.resizable,
    )
    if config.window_position is not None:
        x, y = config.window_position
        window.set_location(int(x), int(y))

    try:
        toolkit = ImGuiToolkit(window, title=str(app_name), fps=config.fps)
    except BaseException:
        window.close()
        raise
    _logger.debug("imgui toolkit ready: %s (%dx%d)", app_name, width, height)
    return toolkit


__all__ = ["ImGuiToolkit", "create_imgui_toolkit"]
