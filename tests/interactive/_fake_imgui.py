"""
どこで: tests/interactive/_fake_imgui.py。
何を: pyimgui の呼び出しを記録するだけの偽モジュール。
なぜ: ImGui コンテキストやウィンドウ無しで、regions/widgets の呼び出し順と書き戻しを検証するため。
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any


class FakeImGui:
    """属性アクセスをすべて記録付きの関数として返す。

    `responses[name]` に値を置くとその値を返し、callable を置くと引数付きで呼んだ結果を返す。
    大文字の属性（定数）は 0 を返す。
    """

    def __init__(self, **responses: Any) -> None:
        self.log: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self.responses: dict[str, Any] = {
            "get_style": SimpleNamespace(alpha=1.0, item_spacing=SimpleNamespace(x=8.0, y=4.0)),
            "calc_text_size": SimpleNamespace(x=10.0, y=12.0),
            "get_item_rect_size": SimpleNamespace(x=50.0, y=20.0),
            "get_item_rect_min": SimpleNamespace(x=0.0, y=0.0),
            "get_item_rect_max": SimpleNamespace(x=50.0, y=20.0),
            "get_window_position": SimpleNamespace(x=0.0, y=0.0),
            "get_window_content_region_max": SimpleNamespace(x=400.0, y=300.0),
            "get_text_line_height": 12.0,
            "get_frame_height": 20.0,
            "get_cursor_screen_pos": (0.0, 0.0),
            "get_color_u32_rgba": 0,
            "get_time": 0.0,
            "get_window_draw_list": SimpleNamespace(
                add_rect=lambda *a, **k: None, add_rect_filled=lambda *a, **k: None
            ),
        }
        self.responses.update(responses)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name.isupper():
            return 0

        def call(*args: Any, **kwargs: Any) -> Any:
            self.log.append((name, args, kwargs))
            response = self.responses.get(name)
            if callable(response):
                return response(*args, **kwargs)
            return response

        return call

    def names(self) -> list[str]:
        return [name for name, _args, _kwargs in self.log]

    def calls(self, name: str) -> list[tuple[Any, ...]]:
        return [args for n, args, _kwargs in self.log if n == name]

    def kwargs(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for n, _args, kwargs in self.log if n == name]
