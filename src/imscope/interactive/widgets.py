# どこで: `src/imscope/interactive/widgets.py`。
# 何を: ウィジェット名を pyimgui の描画関数へ対応付け、セルへの書き戻しまでを行う。
# なぜ: ウィジェットごとの UI 実装を閉じ込め、toolkit のフレーム処理から分離するため。

from __future__ import annotations

import calendar
import datetime as _dt
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from imscope.core.cells import RGB, Bool, Date, Float, Int, Str
from imscope.core.selection import label_at

from .images import TextureCache
from .regions import ImGuiRegion, apply_disabled, apply_invisible, before_item, push_alpha

WidgetFn = Callable[..., Any]

_HEADING_SCALE = 1.4
_SMALL_SCALE = 0.8
_STRONG_RGBA = (1.0, 1.0, 1.0, 1.0)
_LINK_RGBA = (0.35, 0.6, 1.0, 1.0)
_CODE_BG_RGBA = (0.25, 0.25, 0.25, 1.0)
_SPINNER_FRAMES = "|/-\\"
_WEEKDAY_LABELS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")
# pyglet のテクスチャは下の行から並ぶので、v を反転して上下を合わせる。
_TEXTURE_UV0 = (0.0, 1.0)
_TEXTURE_UV1 = (1.0, 0.0)


@dataclass(slots=True)
class WidgetEnv:
    """ウィジェット描画に必要な、フレームをまたぐ状態。"""

    imgui: Any
    textures: TextureCache = field(default_factory=TextureCache)
    open_url: Callable[[str], Any] = webbrowser.open
    # date picker の popup ID -> 表示中の (year, month)。
    calendar_views: dict[str, tuple[int, int]] = field(default_factory=dict)


def _item_id(widget: str, region: ImGuiRegion) -> str:
    """リージョン内で一意な、表示されない ID 接尾辞を返す。"""

    return f"##{widget}{region.item_count}"


def _int_slider_range(lo: int, hi: int) -> tuple[int, int]:
    """int スライダーのレンジ (min, max) を返す。

    ImGui の slider_int は min/max が int32 の “半分レンジ” 以内であることを要求する。
    （範囲外だと assertion error でクラッシュする）
    """

    min_value = max(-1_073_741_824, min(1_073_741_823, int(lo)))
    max_value = max(-1_073_741_824, min(1_073_741_823, int(hi)))
    if min_value > max_value:
        min_value, max_value = max_value, min_value
    return min_value, max_value


def _commit(region: ImGuiRegion, changed: bool) -> bool:
    # push_item_flag が使えない環境でも、無効なリージョンでは値を書き戻さない。
    return bool(changed) and not region.disabled


# --- テキスト ---


def _scaled_text(imgui: Any, text: str, scale: float) -> None:
    imgui.set_window_font_scale(float(scale))
    try:
        imgui.text(text)
    finally:
        imgui.set_window_font_scale(1.0)


def widget_heading(env: WidgetEnv, region: ImGuiRegion, text: str) -> None:
    _scaled_text(env.imgui, text, _HEADING_SCALE)


def widget_small(env: WidgetEnv, region: ImGuiRegion, text: str) -> None:
    _scaled_text(env.imgui, text, _SMALL_SCALE)


def widget_label(env: WidgetEnv, region: ImGuiRegion, text: str) -> None:
    env.imgui.text(text)


def widget_strong(env: WidgetEnv, region: ImGuiRegion, text: str) -> None:
    env.imgui.text_colored(text, *_STRONG_RGBA)


def widget_weak(env: WidgetEnv, region: ImGuiRegion, text: str) -> None:
    env.imgui.text_disabled(text)


def widget_code(env: WidgetEnv, region: ImGuiRegion, text: str) -> None:
    """背景付きでテキストを描く。"""

    imgui = env.imgui
    x, y = imgui.get_cursor_screen_pos()
    size = imgui.calc_text_size(text)
    imgui.get_window_draw_list().add_rect_filled(
        float(x) - 2.0,
        float(y) - 1.0,
        float(x) + float(size.x) + 2.0,
        float(y) + float(size.y) + 1.0,
        imgui.get_color_u32_rgba(*_CODE_BG_RGBA),
        rounding=2.0,
    )
    imgui.text(text)


# --- テキスト編集 ---


def widget_text_edit_singleline(env: WidgetEnv, region: ImGuiRegion, cell: Str) -> bool:
    changed, value = env.imgui.input_text(_item_id("text", region), cell.value, -1)
    if _commit(region, changed):
        cell.value = str(value)
        return True
    return False


def _multiline(env: WidgetEnv, region: ImGuiRegion, cell: Str, *, min_lines: int) -> bool:
    imgui = env.imgui
    line_count = int(cell.value.count("\n")) + 1
    visible_lines = max(min_lines, min(16, line_count))
    height = float(imgui.get_text_line_height()) * float(visible_lines) + 8.0
    changed, value = imgui.input_text_multiline(
        _item_id("multiline", region), cell.value, -1, 0.0, float(height)
    )
    if _commit(region, changed):
        cell.value = str(value)
        return True
    return False


def widget_text_edit_multiline(env: WidgetEnv, region: ImGuiRegion, cell: Str) -> bool:
    return _multiline(env, region, cell, min_lines=3)


def widget_code_editor(env: WidgetEnv, region: ImGuiRegion, cell: Str) -> bool:
    return _multiline(env, region, cell, min_lines=6)


# --- ボタン / リンク ---


def widget_button(env: WidgetEnv, region: ImGuiRegion, text: str) -> bool:
    return _commit(region, env.imgui.button(f"{text}{_item_id('button', region)}"))


def widget_small_button(env: WidgetEnv, region: ImGuiRegion, text: str) -> bool:
    return _commit(region, env.imgui.small_button(f"{text}{_item_id('small', region)}"))


def _link(env: WidgetEnv, region: ImGuiRegion, text: str) -> bool:
    imgui = env.imgui
    imgui.text_colored(text, *_LINK_RGBA)
    if imgui.is_item_hovered() and not region.disabled:
        imgui.set_mouse_cursor(imgui.MOUSE_CURSOR_HAND)
    return _commit(region, imgui.is_item_clicked())


def widget_link_clicked(env: WidgetEnv, region: ImGuiRegion, text: str) -> bool:
    return _link(env, region, text)


def widget_hyperlink(env: WidgetEnv, region: ImGuiRegion, url: str) -> None:
    if _link(env, region, url):
        env.open_url(url)


def widget_hyperlink_to(env: WidgetEnv, region: ImGuiRegion, text: str, url: str) -> None:
    if _link(env, region, text):
        env.open_url(url)


def widget_image(env: WidgetEnv, region: ImGuiRegion, source: str) -> None:
    texture = env.textures.get(source)
    if texture is None:
        env.imgui.text_disabled(f"[image: {source}]")
        return
    env.imgui.image(
        texture.texture_id,
        float(texture.width),
        float(texture.height),
        uv0=_TEXTURE_UV0,
        uv1=_TEXTURE_UV1,
    )


def widget_image_and_text(env: WidgetEnv, region: ImGuiRegion, source: str, text: str) -> bool:
    """画像を文字の高さに縮めて、ボタンの先頭に並べる。"""

    imgui = env.imgui
    texture = env.textures.get(source)
    item_id = _item_id("image_button", region)
    clicked = False
    if texture is not None:
        height = float(imgui.get_frame_height())
        width = height * float(texture.width) / float(max(1, texture.height))
        imgui.push_id(item_id)
        try:
            clicked = bool(
                imgui.image_button(
                    texture.texture_id, width, height, uv0=_TEXTURE_UV0, uv1=_TEXTURE_UV1
                )
            )
        finally:
            imgui.pop_id()
        imgui.same_line()
    clicked = bool(imgui.button(f"{text}{item_id}")) or clicked
    return _commit(region, clicked)


# --- 値ウィジェット ---


def widget_slider_float(
    env: WidgetEnv, region: ImGuiRegion, cell: Float, lo: float, hi: float, text: str
) -> bool:
    changed, value = env.imgui.slider_float(
        f"{text}{_item_id('slider', region)}", cell.value, float(lo), float(hi)
    )
    if _commit(region, changed):
        cell.value = float(value)
        return True
    return False


def widget_slider_int(
    env: WidgetEnv, region: ImGuiRegion, cell: Int, lo: int, hi: int, text: str
) -> bool:
    min_value, max_value = _int_slider_range(lo, hi)
    changed, value = env.imgui.slider_int(
        f"{text}{_item_id('slider', region)}", cell.value, min_value, max_value
    )
    if _commit(region, changed):
        cell.value = int(value)
        return True
    return False


def widget_drag_float(
    env: WidgetEnv, region: ImGuiRegion, cell: Float, lo: float, hi: float, speed: float
) -> bool:
    changed, value = env.imgui.drag_float(
        _item_id("drag", region), cell.value, float(speed), float(lo), float(hi)
    )
    if _commit(region, changed):
        cell.value = float(value)
        return True
    return False


def widget_drag_int(
    env: WidgetEnv, region: ImGuiRegion, cell: Int, lo: int, hi: int, speed: float
) -> bool:
    min_value, max_value = _int_slider_range(lo, hi)
    changed, value = env.imgui.drag_int(
        _item_id("drag", region), cell.value, float(speed), min_value, max_value
    )
    if _commit(region, changed):
        cell.value = int(value)
        return True
    return False


def widget_checkbox(env: WidgetEnv, region: ImGuiRegion, cell: Bool, text: str) -> bool:
    clicked, state = env.imgui.checkbox(f"{text}{_item_id('checkbox', region)}", cell.value)
    if _commit(region, clicked):
        cell.value = bool(state)
        return True
    return False


def _selectable(env: WidgetEnv, region: ImGuiRegion, text: str, selected: bool) -> bool:
    imgui = env.imgui
    width = float(imgui.calc_text_size(text).x)
    clicked, _selected_now = imgui.selectable(
        f"{text}{_item_id('selectable', region)}", bool(selected), 0, width, 0
    )
    return _commit(region, clicked)


def widget_toggle_value(env: WidgetEnv, region: ImGuiRegion, cell: Bool, text: str) -> bool:
    if not _selectable(env, region, text, cell.value):
        return False
    cell.value = not cell.value
    return True


def widget_selectable_value(
    env: WidgetEnv, region: ImGuiRegion, cell: Int, alternative: int, text: str
) -> bool:
    if not _selectable(env, region, text, cell.value == alternative):
        return False
    cell.value = alternative
    return True


def widget_radio_value(
    env: WidgetEnv, region: ImGuiRegion, cell: Int, alternative: int, text: str
) -> bool:
    clicked = env.imgui.radio_button(
        f"{text}{_item_id('radio', region)}", cell.value == alternative
    )
    if not _commit(region, clicked):
        return False
    cell.value = alternative
    return True


def widget_combo_box(
    env: WidgetEnv,
    region: ImGuiRegion,
    cell: Int,
    alternatives: tuple[int, ...],
    names: tuple[str, ...],
    preview: str,
    text: str,
) -> bool:
    """`alternatives` を順に並べる。対応する名前が無い候補は "Unknown" と表示する。"""

    imgui = env.imgui
    changed = False
    if imgui.begin_combo(f"{text}{_item_id('combo', region)}", preview):
        try:
            for i, alternative in enumerate(alternatives):
                name = label_at(names, i)
                selected = cell.value == alternative
                clicked, _selected_now = imgui.selectable(f"{name}##{i}", selected)
                if _commit(region, clicked):
                    cell.value = alternative
                    changed = True
                if selected:
                    imgui.set_item_default_focus()
        finally:
            imgui.end_combo()
    return changed


def widget_color_edit_button_rgb(env: WidgetEnv, region: ImGuiRegion, cell: RGB) -> bool:
    """色見本だけを表示し、クリックで ImGui のカラーピッカーを開く。"""

    imgui = env.imgui
    r, g, b = cell.as_tuple()
    changed, out = imgui.color_edit3(
        _item_id("color", region), r, g, b, flags=imgui.COLOR_EDIT_NO_INPUTS
    )
    if not _commit(region, changed):
        return False
    r2, g2, b2 = out
    cell.set(float(r2), float(g2), float(b2))
    return True


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + int(delta)
    year, month0 = divmod(index, 12)
    year = max(_dt.MINYEAR, min(_dt.MAXYEAR, year))
    return year, month0 + 1


def _draw_calendar(env: WidgetEnv, popup_id: str, cell: Date) -> bool:
    """月表示のカレンダーを描き、日付がクリックされたら True を返す。"""

    imgui = env.imgui
    year, month = env.calendar_views.get(popup_id, (cell.value.year, cell.value.month))

    if imgui.arrow_button("##prev_month", imgui.DIRECTION_LEFT):
        year, month = _shift_month(year, month, -1)
    imgui.same_line()
    imgui.text(f"{year:04d}-{month:02d}")
    imgui.same_line()
    if imgui.arrow_button("##next_month", imgui.DIRECTION_RIGHT):
        year, month = _shift_month(year, month, 1)
    env.calendar_views[popup_id] = (year, month)

    cell_width = float(imgui.calc_text_size("00").x) + 6.0
    for i, name in enumerate(_WEEKDAY_LABELS):
        if i:
            imgui.same_line()
        imgui.selectable(name, False, imgui.SELECTABLE_DISABLED, cell_width, 0)

    picked = False
    for week in calendar.Calendar(firstweekday=0).monthdayscalendar(year, month):
        for i, day in enumerate(week):
            if i:
                imgui.same_line()
            if day == 0:
                imgui.dummy(cell_width, 0)
                continue
            date = _dt.date(year, month, day)
            clicked, _selected_now = imgui.selectable(
                f"{day:2d}##day{day}", date == cell.value, 0, cell_width, 0
            )
            if clicked:
                cell.value = date
                picked = True
    if picked:
        env.calendar_views.pop(popup_id, None)
        imgui.close_current_popup()
    return picked


def widget_date_picker_button(env: WidgetEnv, region: ImGuiRegion, cell: Date) -> bool:
    imgui = env.imgui
    item_id = _item_id("date", region)
    popup_id = f"calendar{item_id}"
    if _commit(region, imgui.button(f"{cell.value.isoformat()}{item_id}")):
        env.calendar_views[popup_id] = (cell.value.year, cell.value.month)
        imgui.open_popup(popup_id)

    changed = False
    if imgui.begin_popup(popup_id):
        try:
            changed = _draw_calendar(env, popup_id, cell)
        finally:
            imgui.end_popup()
    return changed


# --- その他 ---


def widget_progress(env: WidgetEnv, region: ImGuiRegion, value: float) -> None:
    fraction = max(0.0, min(1.0, float(value)))
    env.imgui.progress_bar(fraction, (0, 0), f"{fraction * 100.0:.0f}%")


def widget_spinner(env: WidgetEnv, region: ImGuiRegion) -> None:
    imgui = env.imgui
    frame = int(float(imgui.get_time()) * 8.0) % len(_SPINNER_FRAMES)
    imgui.text(_SPINNER_FRAMES[frame])


def widget_separator(env: WidgetEnv, region: ImGuiRegion) -> None:
    env.imgui.separator()


def widget_add_space(env: WidgetEnv, region: ImGuiRegion, amount: float) -> None:
    amount = max(0.0, float(amount))
    if region.layout == "vertical":
        env.imgui.dummy(0.0, amount)
    else:
        env.imgui.dummy(amount, 0.0)


def widget_set_invisible(env: WidgetEnv, region: ImGuiRegion) -> None:
    apply_invisible(env.imgui, region)


def widget_disable(env: WidgetEnv, region: ImGuiRegion) -> None:
    apply_disabled(env.imgui, region)


def widget_set_opacity(env: WidgetEnv, region: ImGuiRegion, opacity: float) -> None:
    push_alpha(env.imgui, region, opacity)


_WIDGETS: dict[str, WidgetFn] = {
    "heading": widget_heading,
    "monospace": widget_label,
    "small": widget_small,
    "strong": widget_strong,
    "weak": widget_weak,
    "label": widget_label,
    "code": widget_code,
    "code_editor": widget_code_editor,
    "text_edit_singleline": widget_text_edit_singleline,
    "text_edit_multiline": widget_text_edit_multiline,
    "button_clicked": widget_button,
    "small_button_clicked": widget_small_button,
    "hyperlink": widget_hyperlink,
    "hyperlink_to": widget_hyperlink_to,
    "link_clicked": widget_link_clicked,
    "image": widget_image,
    "image_and_text_clicked": widget_image_and_text,
    "slider_float": widget_slider_float,
    "slider_int": widget_slider_int,
    "drag_float": widget_drag_float,
    "drag_int": widget_drag_int,
    "checkbox": widget_checkbox,
    "toggle_value": widget_toggle_value,
    "radio_value": widget_radio_value,
    "selectable_value": widget_selectable_value,
    "combo_box": widget_combo_box,
    "color_edit_button_rgb": widget_color_edit_button_rgb,
    "date_picker_button": widget_date_picker_button,
    "progress": widget_progress,
    "spinner": widget_spinner,
    "separator": widget_separator,
    "add_space": widget_add_space,
    "set_invisible": widget_set_invisible,
    "disable": widget_disable,
    "set_opacity": widget_set_opacity,
}

# 要素を置かずにリージョンの状態だけを変えるもの（レイアウトを進めない）。
_REGION_STATE_WIDGETS: frozenset[str] = frozenset({"set_invisible", "disable", "set_opacity"})


def render_widget(env: WidgetEnv, region: ImGuiRegion, widget: str, *args: Any) -> Any:
    """`widget` を `region` に描画し、ウィジェットの戻り値を返す。

    Raises
    ------
    ValueError
        未知のウィジェット名、または閉じたリージョンへの描画。
    """

    fn = _WIDGETS.get(widget)
    if fn is None:
        raise ValueError(f"unknown widget: {widget}")
    if region.closed:
        raise ValueError(f"cannot draw {widget} into a closed region: {region.kind}")
    if widget not in _REGION_STATE_WIDGETS:
        before_item(env.imgui, region)
    return fn(env, region, *args)


def widget_registry() -> dict[str, WidgetFn]:
    """widget 名→描画関数マップのコピーを返す。"""

    return dict(_WIDGETS)


__all__ = ["WidgetEnv", "WidgetFn", "render_widget", "widget_registry"]
