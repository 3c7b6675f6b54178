"""interactive.widgets（widget 名 → pyimgui 描画とセルへの書き戻し）をテスト。"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest
from _fake_imgui import FakeImGui

from imscope.core.cells import Bool, Date, Float, Int, RGB, Str
from imscope.interactive.images import Texture, TextureCache
from imscope.interactive.regions import ImGuiRegion
from imscope.interactive.widgets import (
    WidgetEnv,
    _int_slider_range,
    _shift_month,
    render_widget,
    widget_registry,
)


def _env(imgui: FakeImGui, **kwargs) -> WidgetEnv:
    return WidgetEnv(imgui=imgui, textures=TextureCache(loader=lambda path: None), **kwargs)


def test_registry_covers_every_public_widget() -> None:
    import imscope.api.widgets as api_widgets

    public = set(api_widgets.__all__)
    assert public <= set(widget_registry())


def test_unknown_widget_is_rejected() -> None:
    with pytest.raises(ValueError):
        render_widget(_env(FakeImGui()), ImGuiRegion(kind="root"), "teleport")


def test_closed_region_is_rejected() -> None:
    region = ImGuiRegion(kind="scope", closed=True)
    with pytest.raises(ValueError):
        render_widget(_env(FakeImGui()), region, "label", "x")


def test_slider_float_writes_back_only_when_changed() -> None:
    cell = Float(5.0)
    region = ImGuiRegion(kind="root")

    imgui = FakeImGui(slider_float=lambda *a, **k: (False, 9.0))
    assert render_widget(_env(imgui), region, "slider_float", cell, 0.0, 10.0, "v") is False
    assert cell.value == 5.0

    imgui = FakeImGui(slider_float=lambda *a, **k: (True, 7.5))
    assert render_widget(_env(imgui), region, "slider_float", cell, 0.0, 10.0, "v") is True
    assert cell.value == 7.5
    label, value, lo, hi = imgui.calls("slider_float")[0]
    assert label.startswith("v##")
    assert (value, lo, hi) == (5.0, 0.0, 10.0)


def test_disabled_region_does_not_write_back() -> None:
    cell = Bool(False)
    region = ImGuiRegion(kind="enabled", disabled=True)
    imgui = FakeImGui(checkbox=lambda *a, **k: (True, True))

    assert render_widget(_env(imgui), region, "checkbox", cell, "c") is False
    assert cell.value is False


def test_int_slider_range_is_clamped_to_half_int32() -> None:
    assert _int_slider_range(-(2**31), 2**31 - 1) == (-1_073_741_824, 1_073_741_823)
    assert _int_slider_range(10, 0) == (0, 10)

    cell = Int(0)
    imgui = FakeImGui(slider_int=lambda *a, **k: (False, 0))
    render_widget(_env(imgui), ImGuiRegion(kind="root"), "slider_int", cell, -(2**31), 2**31 - 1, "n")
    _label, _value, lo, hi = imgui.calls("slider_int")[0]
    assert (lo, hi) == (-1_073_741_824, 1_073_741_823)


def test_item_ids_are_unique_within_region() -> None:
    imgui = FakeImGui(button=False)
    region = ImGuiRegion(kind="root")
    env = _env(imgui)
    render_widget(env, region, "button_clicked", "same")
    render_widget(env, region, "button_clicked", "same")

    (first,), (second,) = imgui.calls("button")
    assert first != second
    assert first.split("##")[0] == second.split("##")[0] == "same"


def test_combo_box_selects_clicked_alternative() -> None:
    cell = Int(7)

    def selectable(label, selected, *args):
        return (label.startswith("blue"), selected)

    imgui = FakeImGui(begin_combo=True, selectable=selectable)
    changed = render_widget(
        _env(imgui),
        ImGuiRegion(kind="root"),
        "combo_box",
        cell,
        (0, 1, 2),
        ("red", "green", "blue"),
        "Unknown",
        "choose",
    )

    assert changed is True
    assert cell.value == 2
    assert imgui.calls("begin_combo")[0][1] == "Unknown"
    assert "end_combo" in imgui.names()


def test_combo_box_entry_without_name_shows_unknown() -> None:
    imgui = FakeImGui(begin_combo=True, selectable=(False, False))
    render_widget(
        _env(imgui), ImGuiRegion(kind="root"), "combo_box", Int(0), (0, 1), ("a",), "a", "c"
    )
    assert [args[0] for args in imgui.calls("selectable")] == ["a##0", "Unknown##1"]


def test_closed_combo_box_does_not_end_combo() -> None:
    imgui = FakeImGui(begin_combo=False)
    render_widget(
        _env(imgui), ImGuiRegion(kind="root"), "combo_box", Int(0), (0,), ("a",), "a", "c"
    )
    assert "end_combo" not in imgui.names()


def test_toggle_and_radio_values() -> None:
    flag = Bool(False)
    choice = Int(0)
    imgui = FakeImGui(selectable=lambda *a, **k: (True, True), radio_button=True)
    env = _env(imgui)
    region = ImGuiRegion(kind="root")

    render_widget(env, region, "toggle_value", flag, "t")
    render_widget(env, region, "radio_value", choice, 3, "three")
    assert flag.value is True
    assert choice.value == 3


def test_text_edit_writes_back() -> None:
    cell = Str("old")
    imgui = FakeImGui(input_text=lambda *a, **k: (True, "new"))
    render_widget(_env(imgui), ImGuiRegion(kind="root"), "text_edit_singleline", cell)
    assert cell.value == "new"


def test_color_edit_writes_back_rgb() -> None:
    cell = RGB(1.0, 0.0, 0.0)
    imgui = FakeImGui(color_edit3=lambda *a, **k: (True, (0.0, 0.5, 1.0)))
    render_widget(_env(imgui), ImGuiRegion(kind="root"), "color_edit_button_rgb", cell)
    assert cell.as_tuple() == (0.0, 0.5, 1.0)


def test_hyperlink_opens_url_when_clicked() -> None:
    opened: list[str] = []
    imgui = FakeImGui(is_item_clicked=True, is_item_hovered=False)
    env = _env(imgui, open_url=opened.append)

    render_widget(env, ImGuiRegion(kind="root"), "hyperlink_to", "docs", "https://example.com")
    assert opened == ["https://example.com"]


def test_missing_image_draws_placeholder() -> None:
    imgui = FakeImGui()
    render_widget(_env(imgui), ImGuiRegion(kind="root"), "image", "https://example.com/a.png")
    assert imgui.calls("text_disabled") == [("[image: https://example.com/a.png]",)]
    assert "image" not in imgui.names()


def test_region_state_widgets_do_not_advance_layout() -> None:
    imgui = FakeImGui()
    region = ImGuiRegion(kind="scope", layout="horizontal")
    env = _env(imgui)

    render_widget(env, region, "set_opacity", 0.5)
    assert region.item_count == 0
    assert imgui.calls("push_style_var") == [(0, 0.5)]

    render_widget(env, region, "label", "a")
    render_widget(env, region, "label", "b")
    assert region.item_count == 2
    assert imgui.names().count("same_line") == 1


def test_date_picker_selects_clicked_day() -> None:
    cell = Date(dt.date(2024, 2, 1))

    def selectable(label, selected, *args):
        return (label.startswith("15##"), selected)

    imgui = FakeImGui(
        button=True,
        begin_popup=True,
        arrow_button=False,
        selectable=selectable,
    )
    env = _env(imgui)

    assert render_widget(env, ImGuiRegion(kind="root"), "date_picker_button", cell) is True
    assert cell.value == dt.date(2024, 2, 15)
    assert len(imgui.calls("open_popup")) == 1
    assert "close_current_popup" in imgui.names()
    assert "end_popup" in imgui.names()
    assert env.calendar_views == {}


def test_shift_month_wraps_years() -> None:
    assert _shift_month(2024, 1, -1) == (2023, 12)
    assert _shift_month(2024, 12, 1) == (2025, 1)
    assert _shift_month(2024, 6, 0) == (2024, 6)


def test_images_flip_v_for_pyglet_textures(tmp_path: Path) -> None:
    source = tmp_path / "ferris.png"
    source.write_bytes(b"png")
    imgui = FakeImGui(button=False, image_button=False)
    env = WidgetEnv(
        imgui=imgui, textures=TextureCache(loader=lambda path: Texture(7, 32, 16))
    )
    region = ImGuiRegion(kind="root")

    render_widget(env, region, "image", str(source))
    render_widget(env, region, "image_and_text_clicked", str(source), "ferris")

    assert imgui.calls("image") == [(7, 32.0, 16.0)]
    assert imgui.calls("image_button") == [(7, 40.0, 20.0)]
    for kwargs in imgui.kwargs("image") + imgui.kwargs("image_button"):
        assert kwargs == {"uv0": (0.0, 1.0), "uv1": (1.0, 0.0)}
