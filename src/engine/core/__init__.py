"""
どこで: `engine.core` サブパッケージ。
何を: 点列表現 `Geometry` と、入力点群の正規化（PointSetNormalizer）を提供。
なぜ: 属性テーブル補完と状態更新の双方が同じ点数/点列を前提にできるよう、基盤を一箇所に置くため。
"""
