"""
どこで: `engine.render` サブパッケージ。
何を: 線形状のマテリアル（色テーブル保持者）と、その生成/更新を担うホストを提供。
なぜ: 属性テーブルの計算（engine.line）と描画側のリソース管理を分離するため。
"""
