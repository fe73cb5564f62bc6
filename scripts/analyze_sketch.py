#!/usr/bin/env python3
"""スケッチログ解析スクリプト（描画の進み具合を定量化・プロット）"""

import sys
import pandas as pd
import matplotlib.pyplot as plt
from pathlib import Path


def analyze_sketch_log(csv_path: str, output_png: str = "sketch_analysis.png"):
    """
    log_sketch.py が出力したCSVを解析

    Args:
        csv_path: ログCSVファイルのパス
        output_png: プロットの保存先
    """
    print(f"ログファイル読込: {csv_path}")
    df = pd.read_csv(csv_path)

    print(f"\n=== データサマリー ===")
    print(f"総フレーム数: {len(df)}")
    print(f"粒子数: 最小 {df['particles'].min()} / 最大 {df['particles'].max()}")
    print(f"平均速さ: {df['mean_speed'].mean():.3f} px/step")
    print(f"最大速さ: {df['max_speed'].max():.3f} px/step")
    print(f"ドロップ総数: {df['drops'].sum()}")

    start = df['buffer_brightness'].iloc[0]
    end = df['buffer_brightness'].iloc[-1]
    print(f"\n=== バッファ明度（フェードの進行） ===")
    print(f"  開始: {start:.2f}")
    print(f"  終了: {end:.2f}")
    print(f"  変化: {end - start:+.2f}")

    # 個体数が一定か（初回の充填以降）
    steady = df['particles'].iloc[1:]
    if steady.nunique() <= 1:
        print("  ✅ 個体数は一定")
    else:
        print("  ⚠️ 個体数が変動している")

    fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)

    axes[0].plot(df['frame'], df['buffer_brightness'], label='Buffer brightness')
    axes[0].set_ylabel('Mean RGB')
    axes[0].set_title('Pixel buffer fading')
    axes[0].legend()
    axes[0].grid(alpha=0.3)

    axes[1].plot(df['frame'], df['mean_speed'], label='Mean speed')
    axes[1].plot(df['frame'], df['max_speed'], label='Max speed', alpha=0.6)
    axes[1].set_ylabel('Speed [px/step]')
    axes[1].legend()
    axes[1].grid(alpha=0.3)

    axes[2].bar(df['frame'], df['drops'], label='Ink drops', color='k')
    axes[2].set_xlabel('Frame')
    axes[2].set_ylabel('Drops')
    axes[2].legend()
    axes[2].grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_png, dpi=150)
    print(f"\nPlot saved to {output_png}")


if __name__ == "__main__":
    project_root = Path(__file__).parent.parent
    csv_file = sys.argv[1] if len(sys.argv) > 1 else str(project_root / "sketch_log.csv")
    analyze_sketch_log(csv_file)
    plt.show()
