# どこで: `src/imscope/__init__.py`。
# 何を: ルート `imscope` パッケージを定義する。
# なぜ: import 起点を `imscope` に統一するため。

from __future__ import annotations

from imscope.api import (
    add_enabled,
    add_space,
    button_clicked,
    checkbox,
    code,
    code_editor,
    collapsing,
    color_edit_button_rgb,
    combo_box,
    date_picker_button,
    disable,
    drag_float,
    drag_int,
    group,
    heading,
    horizontal,
    horizontal_centered,
    horizontal_top,
    horizontal_wrapped,
    hyperlink,
    hyperlink_to,
    image,
    image_and_text_clicked,
    indent,
    label,
    link_clicked,
    monospace,
    progress,
    radio_value,
    run,
    scope,
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
    vertical,
    weak,
)
from imscope.core import (
    RGB,
    AlreadyRunning,
    Bool,
    DanglingHandle,
    Date,
    Float,
    ForeignThread,
    FrameContext,
    HeadlessToolkit,
    HostCallbackFailed,
    ImscopeError,
    Int,
    NoActiveFrame,
    NoActiveScope,
    ScopeResult,
    StackConsistency,
    StackFault,
    StackUnderflow,
    Str,
    WindowCreationError,
)

__all__ = [
    "add_enabled",
    "add_space",
    "AlreadyRunning",
    "Bool",
    "button_clicked",
    "checkbox",
    "code",
    "code_editor",
    "collapsing",
    "color_edit_button_rgb",
    "combo_box",
    "DanglingHandle",
    "Date",
    "date_picker_button",
    "disable",
    "drag_float",
    "drag_int",
    "Float",
    "ForeignThread",
    "FrameContext",
    "group",
    "heading",
    "HeadlessToolkit",
    "horizontal",
    "horizontal_centered",
    "horizontal_top",
    "horizontal_wrapped",
    "HostCallbackFailed",
    "hyperlink",
    "hyperlink_to",
    "image",
    "image_and_text_clicked",
    "ImscopeError",
    "indent",
    "Int",
    "label",
    "link_clicked",
    "monospace",
    "NoActiveFrame",
    "NoActiveScope",
    "progress",
    "radio_value",
    "RGB",
    "run",
    "scope",
    "ScopeResult",
    "selectable_value",
    "separator",
    "set_invisible",
    "set_opacity",
    "slider_float",
    "slider_int",
    "small",
    "small_button_clicked",
    "spinner",
    "StackConsistency",
    "StackFault",
    "StackUnderflow",
    "Str",
    "strong",
    "text_edit_multiline",
    "text_edit_singleline",
    "toggle_value",
    "vertical",
    "weak",
    "WindowCreationError",
]
