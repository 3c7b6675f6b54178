"""
どこで: tests/manual/test_widget_gallery.py。
何を: 全ウィジェットとスコープ関数を 1 画面に並べる手動スモーク。
なぜ: pyimgui 上でのレイアウト/入力/書き戻しを目で確認するため。
"""

from __future__ import annotations

from pathlib import Path

from _runner import run_manual

import imscope as ui

RED, GREEN, BLUE = 0, 1, 2


def main() -> None:
    """ウィジェットが描画でき、操作した値がセルへ書き戻されることを確認する。"""

    name = ui.Str("Ferris")
    source = ui.Str("print(42 + 27)")
    notes = ui.Str("multi\nline")
    age = ui.Int(20)
    ratio = ui.Float(5.0)
    speed = ui.Float(0.5)
    count = ui.Int(3)
    checked = ui.Bool(True)
    toggled = ui.Bool(False)
    color = ui.Int(RED)
    combo = ui.Int(7)
    rgb = ui.RGB(0.9, 0.4, 0.1)
    day = ui.Date()
    enabled = ui.Bool(True)
    image_path = str(Path(__file__).resolve().parent / "ferris.png")

    def update(frame: ui.FrameContext) -> None:
        ui.heading(f"Hello, {name.value}! (frame {frame.frame_index})")

        def name_row() -> None:
            ui.label("Your name:")
            ui.text_edit_singleline(name)

        ui.horizontal(name_row)
        ui.slider_int(age, 0, 120, "age")
        if ui.button_clicked("Click each year"):
            age.value = age.value + 1

        def text_section() -> None:
            ui.monospace("monospace")
            ui.small("small")
            ui.strong("strong")
            ui.weak("weak")
            ui.code("code()")
            ui.code_editor(source)
            ui.text_edit_multiline(notes)

        ui.collapsing("Text", text_section, default_open=True)

        def value_section() -> None:
            ui.slider_float(ratio, 0.0, 10.0, "ratio")
            ui.drag_float(speed, 0.0, 1.0, 0.01)
            ui.drag_int(count, 0, 10, 0.1)
            ui.checkbox(checked, "checked")
            ui.toggle_value(toggled, "toggle")

            def radios() -> None:
                ui.radio_value(color, RED, "red")
                ui.radio_value(color, GREEN, "green")
                ui.selectable_value(color, BLUE, "blue")

            ui.horizontal_wrapped(radios)
            # 候補外の値なので、選ぶまでは "Unknown" と表示される。
            ui.combo_box(combo, [RED, GREEN, BLUE], ["red", "green", "blue"], "combo")
            ui.color_edit_button_rgb(rgb)
            ui.date_picker_button(day)

        ui.collapsing("Values", value_section)

        def misc_section() -> None:
            ui.progress((frame.frame_index % 300) / 300.0)
            ui.spinner()
            ui.separator()
            ui.add_space(12)
            ui.hyperlink("https://github.com/pyimgui/pyimgui")
            ui.hyperlink_to("pyglet", "https://pyglet.org")
            if ui.link_clicked("link"):
                print("link clicked")
            ui.image(image_path)
            if ui.image_and_text_clicked(image_path, "image button"):
                print("image button clicked")
            if ui.small_button_clicked("fail this frame"):
                raise RuntimeError("failure requested from the UI")

        ui.collapsing("Misc", misc_section)

        def styles() -> None:
            ui.checkbox(enabled, "enable the group")

            def disabled_part() -> None:
                ui.label("disabled while unchecked")
                ui.button_clicked("maybe disabled")

            ui.add_enabled(enabled.value, disabled_part)

            def faded() -> None:
                ui.set_opacity(0.5)
                ui.label("0.5 opacity")

            ui.scope(faded)

            def hidden() -> None:
                ui.set_invisible()
                ui.label("invisible")

            ui.indent(hidden)
            ui.horizontal_top(lambda: ui.label("top aligned"))
            ui.horizontal_centered(lambda: ui.label("centered"))
            ui.vertical(lambda: ui.label("vertical"))

        ui.group(styles)

    run_manual(update, caption="imscope widget gallery")


if __name__ == "__main__":
    main()
