# どこで: `src/imscope/interactive/pyglet_backend.py`。
# 何を: pyglet + imgui の backend（window 生成 / renderer 作成 / IO 同期）を提供する。
# なぜ: toolkit のフレーム処理から、backend 固有の処理を分離するため。

from __future__ import annotations

from typing import Any

from imscope.core.errors import WindowCreationError

DEFAULT_WINDOW_WIDTH = 800
DEFAULT_WINDOW_HEIGHT = 600


def _create_imgui_pyglet_renderer(imgui_pyglet_mod: Any, gui_window: Any) -> Any:
    """pyglet 用の ImGui renderer を作成する。"""

    factory = getattr(imgui_pyglet_mod, "create_renderer", None)
    if callable(factory):
        return factory(gui_window)
    renderer_type = getattr(imgui_pyglet_mod, "PygletRenderer", None)
    if renderer_type is None:
        raise RuntimeError("imgui.integrations.pyglet renderer is unavailable")
    return renderer_type(gui_window)


def _sync_imgui_io_for_window(imgui_mod: Any, gui_window: Any, *, dt: float) -> None:
    """ImGui IO をウィンドウ状態（サイズ/Retina スケール/Δt）に同期する。"""

    io = imgui_mod.get_io()
    io.delta_time = max(float(dt), 1e-4)

    fb_w, fb_h = gui_window.get_framebuffer_size()
    win_w, win_h = gui_window.width, gui_window.height
    io.display_size = (float(win_w), float(win_h))
    io.display_fb_scale = (
        float(fb_w) / float(max(1, win_w)),
        float(fb_h) / float(max(1, win_h)),
    )


def create_window(
    *,
    caption: str,
    width: int = DEFAULT_WINDOW_WIDTH,
    height: int = DEFAULT_WINDOW_HEIGHT,
    vsync: bool = False,
    resizable: bool = True,
) -> Any:
    """GUI 用の pyglet ウィンドウを生成する。

    Raises
    ------
    WindowCreationError
        表示環境が無い、OpenGL の設定が得られないなどでウィンドウを作れない場合。
    """

    try:
        import pyglet

        gl_cfg = pyglet.gl.Config(  # type: ignore[abstract]
            double_buffer=True,
            sample_buffers=1,
            samples=4,
        )
        try:
            return pyglet.window.Window(  # type: ignore[abstract]
                width=int(width),
                height=int(height),
                caption=str(caption),
                resizable=bool(resizable),
                vsync=bool(vsync),
                config=gl_cfg,
            )
        except pyglet.window.NoSuchConfigException:
            # マルチサンプル非対応の環境では既定の config で作り直す。
            return pyglet.window.Window(  # type: ignore[abstract]
                width=int(width),
                height=int(height),
                caption=str(caption),
                resizable=bool(resizable),
                vsync=bool(vsync),
            )
    except Exception as exc:
        raise WindowCreationError(f"Cannot create a window: {exc}") from exc


__all__ = ["DEFAULT_WINDOW_HEIGHT", "DEFAULT_WINDOW_WIDTH", "create_window"]
