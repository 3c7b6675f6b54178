"""
どこで: `src/imscope/api/__init__.py`。
何を: ホスト向け公開 API（run / ウィジェット関数 / スコープ関数）を 1 箇所から提供する。
なぜ: `import imscope as ui` だけで UI を記述できるようにするため。
"""

from __future__ import annotations

from imscope.api.run import run
from imscope.api.scopes import (
    add_enabled,
    collapsing,
    group,
    horizontal,
    horizontal_centered,
    horizontal_top,
    horizontal_wrapped,
    indent,
    scope,
    vertical,
)
from imscope.api.widgets import (
    add_space,
    button_clicked,
    checkbox,
    code,
    code_editor,
    color_edit_button_rgb,
    combo_box,
    date_picker_button,
    disable,
    drag_float,
    drag_int,
    heading,
    hyperlink,
    hyperlink_to,
    image,
    image_and_text_clicked,
    label,
    link_clicked,
    monospace,
    progress,
    radio_value,
    selectable_value,
    separator,
    set_invisible,
    set_opacity,
    slider_float,
    slider_int,
    small,
    small_button_clicked,
    spinner,
    strong,
    text_edit_multiline,
    text_edit_singleline,
    toggle_value,
    weak,
)

__all__ = [
    "add_enabled",
    "add_space",
    "button_clicked",
    "checkbox",
    "code",
    "code_editor",
    "collapsing",
    "color_edit_button_rgb",
    "combo_box",
    "date_picker_button",
    "disable",
    "drag_float",
    "drag_int",
    "group",
    "heading",
    "horizontal",
    "horizontal_centered",
    "horizontal_top",
    "horizontal_wrapped",
    "hyperlink",
    "hyperlink_to",
    "image",
    "image_and_text_clicked",
    "indent",
    "label",
    "link_clicked",
    "monospace",
    "progress",
    "radio_value",
    "run",
    "scope",
    "selectable_value",
    "separator",
    "set_invisible",
    "set_opacity",
    "slider_float",
    "slider_int",
    "small",
    "small_button_clicked",
    "spinner",
    "strong",
    "text_edit_multiline",
    "text_edit_singleline",
    "toggle_value",
    "vertical",
    "weak",
]
