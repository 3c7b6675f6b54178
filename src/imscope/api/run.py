"""
どこで: `src/imscope/api/run.py`。公開 API のランナー実装。
何を: ウィンドウを生成し、閉じられるまで毎フレーム `update(frame)` を root リージョン上で実行する。
なぜ: セッションの開始/終了（ガード取得・toolkit 生成・後始末）を 1 箇所にまとめるため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from imscope.core.errors import HostCallbackFailed
from imscope.core.frame_driver import FrameDriver
from imscope.core.run_guard import RUN_GUARD
from imscope.core.runtime_config import runtime_config, set_config_path
from imscope.core.session import Session, validate_error_policy
from imscope.core.toolkit import FrameContext, Toolkit

_logger = logging.getLogger(__name__)


def run(
    app_name: str,
    update: Callable[[FrameContext], None],
    *,
    toolkit: Toolkit | None = None,
    config_path: str | Path | None = None,
    on_error: Callable[[HostCallbackFailed], None] | None = None,
    error_policy: str | None = None,
) -> None:
    """ウィンドウを生成し、`update(frame)` を毎フレーム実行する。GUI アプリの起点。

    Parameters
    ----------
    app_name : str
        ウィンドウタイトル。
    update : Callable[[FrameContext], None]
        1 フレーム分の UI を記述する関数。中でウィジェット関数/スコープ関数を呼ぶ。
    toolkit : Toolkit | None
        使う toolkit。None の場合は pyglet + pyimgui のウィンドウを作る。
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    on_error : Callable[[HostCallbackFailed], None] | None
        update 関数/スコープ body が例外を送出したときに呼ぶフック。
    error_policy : str | None
        "log"（ログに残して続ける）または "raise"（`run()` の呼び出し元へ送出する）。
        None の場合は config の `errors.policy` に従う。

    Returns
    -------
    None
        ウィンドウが閉じられると制御を返す。

    Raises
    ------
    AlreadyRunning
        別のセッションが実行中の場合（待たずに即座に送出する）。
    WindowCreationError
        ウィンドウを作成できない場合。
    HostCallbackFailed
        エラー方針が "raise" で、update 関数が失敗した場合。

    Examples
    --------
    >>> name = Str("")
    >>> def update(frame):
    ...     heading(f"Hello, {name.value}!")
    ...     text_edit_singleline(name)
    ...     if button_clicked("click me"):
    ...         print("clicked")
    >>> run("My app", update)  # doctest: +SKIP
    """

    if not callable(update):
        raise TypeError(f"update は関数である必要があります: {update!r}")

    # 2 つ目のセッションは待たずに失敗させる。以降の全ての経路でガードを解放する。
    with RUN_GUARD.hold():
        set_config_path(config_path)
        cfg = runtime_config()
        logging.getLogger("imscope").setLevel(cfg.log_level)

        policy = cfg.error_policy if error_policy is None else validate_error_policy(error_policy)

        if toolkit is None:
            # pyglet / pyimgui は依存が重いので、実際にウィンドウを作るときだけ遅延 import する。
            from imscope.interactive import create_imgui_toolkit

            toolkit = create_imgui_toolkit(str(app_name), config=cfg)

        session = Session(
            app_name=str(app_name),
            update=update,
            toolkit=toolkit,
            on_error=on_error,
            error_policy=policy,
        )
        driver = FrameDriver(session)
        _logger.info("session started: %s", session.app_name)
        try:
            toolkit.install_image_loaders()
            toolkit.run(driver.tick)
        finally:
            try:
                session.close()
            finally:
                # 例外でも確実に後始末する。
                toolkit.close()
                _logger.info(
                    "session ended: %s (frames=%d, failures=%d)",
                    session.app_name,
                    session.frame_index,
                    session.failures,
                )


__all__ = ["run"]
