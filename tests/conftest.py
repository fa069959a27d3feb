"""共通フィクスチャ。

- 乱数シード固定
- 小さな Geometry 試料
- 既定値キャッシュと numba 設定の隔離
- 描画側の受け手（通知を記録するだけ）
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common import settings
from engine.core.geometry import Geometry
from engine.line import defaults as line_defaults
from engine.render.material import LineMaterialHost


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def fresh_line_defaults() -> Iterator[None]:
    """テストごとに既定値キャッシュを破棄する。"""
    line_defaults._CACHED = None
    yield
    line_defaults._CACHED = None


@pytest.fixture(params=[True, False], ids=["numba", "python"])
def numba_mode(request: pytest.FixtureRequest) -> Iterator[bool]:
    """カーネルを JIT あり/なしの両方で実行する。"""
    s = settings.get()
    prev = s.USE_NUMBA
    s.USE_NUMBA = request.param
    yield request.param
    s.USE_NUMBA = prev


@pytest.fixture()
def geom_two_lines() -> Geometry:
    a = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)
    b = np.array([[0.0, 1.0, 0.0], [1.0, 1.0, 0.0], [2.0, 1.0, 0.0]], dtype=np.float32)
    return Geometry.from_lines([a, b])


class RecordingListener:
    """`notify_geometry_changed` の呼び出しを記録する。"""

    def __init__(self) -> None:
        self.calls: list[bool] = []

    def notify_geometry_changed(self, deferred: bool) -> None:
        self.calls.append(deferred)


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture()
def host() -> LineMaterialHost:
    return LineMaterialHost()
