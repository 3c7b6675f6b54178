# どこで: `src/imscope/core/headless.py`。
# 何を: ウィンドウを作らずに描画呼び出しを記録するヘッドレス toolkit を提供する。
# なぜ: ホストの update 関数やコアのスコープ処理を、表示環境の無い CI でも決定的に検証できるようにするため。

from __future__ import annotations

import datetime as _dt
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .cells import RGB, Bool, Date, Float, Int, Str
from .toolkit import ROOT_KIND

TEXT_WIDGETS: frozenset[str] = frozenset(
    {"heading", "monospace", "small", "strong", "weak", "label", "code"}
)


@dataclass(frozen=True, slots=True)
class DrawCall:
    """記録されたウィジェット描画 1 回分。"""

    frame: int
    widget: str
    args: tuple[Any, ...]
    # root から描画先リージョンまでの種別列。
    path: tuple[str, ...]


@dataclass(slots=True)
class HeadlessRegion:
    kind: str
    params: dict[str, Any]
    parent: HeadlessRegion | None = None
    enabled: bool = True
    invisible: bool = False
    opacity: float = 1.0
    closed: bool = False

    @property
    def path(self) -> tuple[str, ...]:
        kinds: list[str] = []
        region: HeadlessRegion | None = self
        while region is not None:
            kinds.append(region.kind)
            region = region.parent
        return tuple(reversed(kinds))

    @property
    def interactive(self) -> bool:
        region: HeadlessRegion | None = self
        while region is not None:
            if not region.enabled or region.invisible:
                return False
            region = region.parent
        return True


def _clamp(value: float, lo: float, hi: float) -> float:
    if lo > hi:
        lo, hi = hi, lo
    return max(lo, min(hi, value))


class HeadlessToolkit:
    """描画を記録するだけの toolkit。

    Parameters
    ----------
    frames : int
        `run()` が回すフレーム数。
    dt : float
        各フレームの経過秒。
    clicks : Iterable[str]
        クリックされたとみなすラベル（button / checkbox / radio など）。
    edits : Mapping[str, Any] | None
        ユーザー入力とみなす値。キーはウィジェットのラベル（ラベルの無い
        ウィジェットはウィジェット名）。
    open_sections : Iterable[str]
        展開済みとみなす collapsing の見出し。
    """

    def __init__(
        self,
        *,
        frames: int = 1,
        dt: float = 1.0 / 60.0,
        clicks: Iterable[str] = (),
        edits: Mapping[str, Any] | None = None,
        open_sections: Iterable[str] = (),
    ) -> None:
        self.frames = int(frames)
        self.dt = float(dt)
        self.clicks = set(clicks)
        self.edits: dict[str, Any] = dict(edits or {})
        self.open_sections = set(open_sections)

        self.calls: list[DrawCall] = []
        self.events: list[tuple[str, str]] = []
        self.opened_urls: list[str] = []
        self.frame_index = 0
        self.open_depth = 0
        self.images_installed = False
        self.closed = False
        self.on_frame_end: Callable[[int], None] | None = None

        self._widgets: dict[str, Callable[..., Any]] = {
            "code_editor": self._text_edit("code_editor"),
            "text_edit_singleline": self._text_edit("text_edit_singleline"),
            "text_edit_multiline": self._text_edit("text_edit_multiline"),
            "button_clicked": self._clicked,
            "small_button_clicked": self._clicked,
            "link_clicked": self._clicked,
            "hyperlink": self._hyperlink,
            "hyperlink_to": self._hyperlink_to,
            "image": self._noop,
            "image_and_text_clicked": self._image_and_text_clicked,
            "slider_float": self._slider_float,
            "slider_int": self._slider_int,
            "drag_float": self._drag_float,
            "drag_int": self._drag_int,
            "checkbox": self._toggle,
            "toggle_value": self._toggle,
            "radio_value": self._assign_alternative,
            "selectable_value": self._assign_alternative,
            "combo_box": self._combo_box,
            "progress": self._noop,
            "spinner": self._noop,
            "color_edit_button_rgb": self._color_edit,
            "date_picker_button": self._date_picker,
            "separator": self._noop,
            "add_space": self._noop,
            "set_invisible": self._set_invisible,
            "disable": self._disable,
            "set_opacity": self._set_opacity,
        }
        for name in TEXT_WIDGETS:
            self._widgets[name] = self._noop

    # --- Toolkit protocol ---

    def open_region(self, parent: Any, kind: str, params: Mapping[str, Any]) -> Any | None:
        if kind == ROOT_KIND:
            if parent is not None:
                raise ValueError("root region must not have a parent")
        elif not isinstance(parent, HeadlessRegion) or parent.closed:
            raise ValueError(f"invalid parent region for {kind}: {parent!r}")

        if kind == "collapsing":
            heading = str(params.get("heading", ""))
            self._record(parent, "collapsing_header", (heading,))
            opened = heading in self.open_sections or bool(params.get("default_open", False))
            if not opened:
                self.events.append(("collapsed", heading))
                return None

        region = HeadlessRegion(kind=str(kind), params=dict(params), parent=parent)
        if kind == "enabled":
            region.enabled = bool(params.get("enabled", True))
        self.open_depth += 1
        self.events.append(("open", str(kind)))
        return region

    def close_region(self, region: Any) -> None:
        if not isinstance(region, HeadlessRegion) or region.closed:
            raise ValueError(f"region is already closed or unknown: {region!r}")
        region.closed = True
        self.open_depth -= 1
        self.events.append(("close", region.kind))

    def draw(self, region: Any, widget: str, *args: Any) -> Any:
        fn = self._widgets.get(widget)
        if fn is None:
            raise ValueError(f"unknown widget: {widget}")
        if not isinstance(region, HeadlessRegion) or region.closed:
            raise ValueError(f"cannot draw {widget} into a closed region: {region!r}")
        self._record(region, widget, args)
        return fn(region, *args)

    def install_image_loaders(self) -> None:
        self.images_installed = True

    def run(self, on_frame: Callable[[float], None]) -> None:
        for _ in range(self.frames):
            on_frame(self.dt)
            hook = self.on_frame_end
            if hook is not None:
                hook(self.frame_index)
            self.frame_index += 1

    def close(self) -> None:
        self.closed = True

    # --- 参照用 ---

    def drawn(self, widget: str | None = None, *, frame: int | None = None) -> list[DrawCall]:
        """記録済みの描画を絞り込んで返す。"""

        return [
            c
            for c in self.calls
            if (widget is None or c.widget == widget) and (frame is None or c.frame == frame)
        ]

    def texts(self, *, frame: int | None = None) -> list[str]:
        """テキスト系ウィジェットで描いた文字列を描画順に返す。"""

        return [
            str(c.args[0])
            for c in self.calls
            if c.widget in TEXT_WIDGETS and (frame is None or c.frame == frame)
        ]

    # --- 内部 ---

    def _record(self, region: HeadlessRegion, widget: str, args: tuple[Any, ...]) -> None:
        self.calls.append(
            DrawCall(frame=self.frame_index, widget=widget, args=tuple(args), path=region.path)
        )

    def _edit(self, region: HeadlessRegion, key: str) -> tuple[bool, Any]:
        if not region.interactive or key not in self.edits:
            return False, None
        return True, self.edits[key]

    def _click(self, region: HeadlessRegion, text: str) -> bool:
        return region.interactive and str(text) in self.clicks

    def _noop(self, region: HeadlessRegion, *args: Any) -> None:
        return None

    def _text_edit(self, name: str) -> Callable[..., bool]:
        def edit(region: HeadlessRegion, cell: Str) -> bool:
            changed, value = self._edit(region, name)
            if changed:
                cell.value = str(value)
            return changed

        return edit

    def _clicked(self, region: HeadlessRegion, text: str) -> bool:
        return self._click(region, text)

    def _hyperlink(self, region: HeadlessRegion, url: str) -> None:
        if self._click(region, url):
            self.opened_urls.append(str(url))

    def _hyperlink_to(self, region: HeadlessRegion, label: str, url: str) -> None:
        if self._click(region, label):
            self.opened_urls.append(str(url))

    def _image_and_text_clicked(self, region: HeadlessRegion, source: str, text: str) -> bool:
        return self._click(region, text)

    def _slider_float(
        self, region: HeadlessRegion, cell: Float, lo: float, hi: float, text: str
    ) -> bool:
        changed, value = self._edit(region, text)
        if changed:
            cell.value = _clamp(float(value), float(lo), float(hi))
        return changed

    def _slider_int(self, region: HeadlessRegion, cell: Int, lo: int, hi: int, text: str) -> bool:
        changed, value = self._edit(region, text)
        if changed:
            cell.value = int(_clamp(int(value), int(lo), int(hi)))
        return changed

    def _drag_float(
        self, region: HeadlessRegion, cell: Float, lo: float, hi: float, speed: float
    ) -> bool:
        changed, value = self._edit(region, "drag_float")
        if changed:
            cell.value = _clamp(float(value), float(lo), float(hi))
        return changed

    def _drag_int(self, region: HeadlessRegion, cell: Int, lo: int, hi: int, speed: float) -> bool:
        changed, value = self._edit(region, "drag_int")
        if changed:
            cell.value = int(_clamp(int(value), int(lo), int(hi)))
        return changed

    def _toggle(self, region: HeadlessRegion, cell: Bool, text: str) -> bool:
        if not self._click(region, text):
            return False
        cell.value = not cell.value
        return True

    def _assign_alternative(
        self, region: HeadlessRegion, cell: Int, alternative: int, text: str
    ) -> bool:
        if not self._click(region, text):
            return False
        cell.value = alternative
        return True

    def _combo_box(
        self,
        region: HeadlessRegion,
        cell: Int,
        alternatives: tuple[int, ...],
        names: tuple[str, ...],
        preview: str,
        label: str,
    ) -> bool:
        changed, value = self._edit(region, label)
        if not changed or value not in alternatives:
            return False
        cell.value = value
        return True

    def _color_edit(self, region: HeadlessRegion, cell: RGB) -> bool:
        changed, value = self._edit(region, "color_edit_button_rgb")
        if changed:
            r, g, b = value
            cell.set(r, g, b)
        return changed

    def _date_picker(self, region: HeadlessRegion, cell: Date) -> bool:
        changed, value = self._edit(region, "date_picker_button")
        if changed:
            if not isinstance(value, _dt.date):
                value = _dt.date.fromisoformat(str(value))
            cell.value = value
        return changed

    def _set_invisible(self, region: HeadlessRegion) -> None:
        region.invisible = True

    def _disable(self, region: HeadlessRegion) -> None:
        region.enabled = False

    def _set_opacity(self, region: HeadlessRegion, opacity: float) -> None:
        region.opacity = region.opacity * _clamp(float(opacity), 0.0, 1.0)


__all__ = ["DrawCall", "HeadlessRegion", "HeadlessToolkit", "TEXT_WIDGETS"]
