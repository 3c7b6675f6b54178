"""
どこで: `src/imscope/interactive/__init__.py`。
何を: pyglet + pyimgui による実ウィンドウ toolkit を提供する。
なぜ: GUI ライブラリへの依存を 1 パッケージへ閉じ込め、コアとヘッドレス利用から切り離すため。
"""

from __future__ import annotations

from .toolkit import ImGuiToolkit, create_imgui_toolkit

__all__ = ["ImGuiToolkit", "create_imgui_toolkit"]
