#!/usr/bin/env python3
"""スケッチ統計ロギングスクリプト（ヘッドレス実行、フレームごとの状態をCSVに記録）"""

import csv
import sys
import numpy as np
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from imagesketcher import config
from imagesketcher.rendering.canvas import RecordingCanvas
from imagesketcher.sketcher import Sketcher


def make_test_image(width: int = 200, height: int = 200) -> np.ndarray:
    """
    合成テスト画像: 横方向のグラデーションの上に黒い円

    Returns:
        (height, width, 4) の uint8 配列
    """
    xs = np.linspace(0, 255, width)
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[:, :, 0] = xs[np.newaxis, :]
    image[:, :, 1] = 128
    image[:, :, 2] = 255 - xs[np.newaxis, :]
    image[:, :, 3] = 255

    yy, xx = np.mgrid[0:height, 0:width]
    circle = (xx - width / 2) ** 2 + (yy - height / 2) ** 2 < (min(width, height) / 4) ** 2
    image[circle, :3] = 0
    return image


def run_sketch(frames: int = 600, output_csv: str = "sketch_log.csv", seed: int = 0):
    """
    スケッチをヘッドレスで実行してログを記録

    Args:
        frames: 実行フレーム数
        output_csv: 出力CSVファイル名
        seed: 乱数シード
    """
    sketcher = Sketcher(make_test_image(), seed=seed)
    sketcher.preload()
    sketcher.setup()
    canvas = RecordingCanvas()

    csv_path = project_root / output_csv
    with open(csv_path, 'w', newline='') as csv_file:
        csv_writer = csv.writer(csv_file)
        csv_writer.writerow([
            'frame',
            'particles',
            'mean_speed',
            'max_speed',
            'lines',
            'drops',
            'buffer_brightness',
        ])

        for _ in range(frames):
            canvas.reset()
            sketcher.tick(canvas)

            speeds = np.array([np.linalg.norm(p.velocity) for p in sketcher.particles])
            drops = sum(1 for _, _, weight in canvas.lines if weight > sketcher.draw_weight)
            brightness = sketcher.buffer.to_array()[:, :, :3].mean()

            csv_writer.writerow([
                sketcher.frame_count,
                len(sketcher.particles),
                f"{speeds.mean():.4f}" if speeds.size else "0",
                f"{speeds.max():.4f}" if speeds.size else "0",
                len(canvas.lines),
                drops,
                f"{brightness:.3f}",
            ])

            if sketcher.frame_count % 100 == 0:
                print(f"  frame {sketcher.frame_count:5d}: 平均明度 {brightness:.1f}")

    print(f"ログ保存: {csv_path}")
    print(f"  粒子数: {config.PARTICLE_COUNT}, サブステップ: {config.STEPS_PER_FRAME}")


if __name__ == "__main__":
    frames = int(sys.argv[1]) if len(sys.argv) > 1 else 600
    run_sketch(frames)
