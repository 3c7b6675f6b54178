# どこで: `src/imscope/interactive/images.py`。
# 何を: 画像ソース（パス / file:// URI）を解決し、GL テクスチャとしてキャッシュする。
# なぜ: 毎フレーム同じ画像を描くため、デコードとアップロードを初回だけに抑えるため。

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Texture:
    """imgui.image へ渡せる GL テクスチャ情報。"""

    texture_id: int
    width: int
    height: int
    # pyglet のテクスチャ本体。参照が切れると GL テクスチャが解放される。
    owner: Any = None


TextureLoader = Callable[[Path], Texture]


def resolve_path(source: str) -> Path | None:
    """画像ソースをローカルパスへ解決する。ローカルで無いソースは None。

    Examples
    --------
    >>> resolve_path("file:///tmp/a.png")
    PosixPath('/tmp/a.png')
    >>> resolve_path("https://example.com/a.png") is None
    True
    """

    text = str(source).strip()
    if not text:
        return None
    parsed = urlparse(text)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path)).expanduser()
    # Windows のドライブレター（`C:\...`）は scheme 1 文字として解釈される。
    if parsed.scheme and len(parsed.scheme) > 1:
        return None
    return Path(text).expanduser()


def load_pyglet_texture(path: Path) -> Texture:
    """pyglet で画像を読み込み、GL テクスチャを作る。"""

    import pyglet

    texture = pyglet.image.load(str(path)).get_texture()
    return Texture(
        texture_id=int(texture.id),
        width=int(texture.width),
        height=int(texture.height),
        owner=texture,
    )


class TextureCache:
    """画像ソースごとのテクスチャキャッシュ。

    読み込みに失敗したソースは None を覚え、ログは 1 回だけ出す。
    """

    def __init__(self, loader: TextureLoader | None = None) -> None:
        self._loader: TextureLoader = load_pyglet_texture if loader is None else loader
        self._cache: dict[str, Texture | None] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, source: str) -> Texture | None:
        """`source` のテクスチャを返す。表示できない場合は None。"""

        key = str(source)
        if key in self._cache:
            return self._cache[key]

        path = resolve_path(key)
        texture: Texture | None = None
        if path is None:
            _logger.warning("画像ソースはローカルファイルのみ対応: %s", key)
        elif not path.is_file():
            _logger.warning("画像ファイルが見つからない: %s", path)
        else:
            try:
                texture = self._loader(path)
            except Exception:
                _logger.warning("画像を読み込めない: %s", path, exc_info=True)
        self._cache[key] = texture
        return texture

    def clear(self) -> None:
        self._cache.clear()


__all__ = ["Texture", "TextureCache", "TextureLoader", "load_pyglet_texture", "resolve_path"]
