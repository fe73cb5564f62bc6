"""imagesketcher 設定・定数"""

from enum import Enum, auto

# 画面設定
SCREEN_WIDTH = 600
SCREEN_HEIGHT = 600
FPS = 60
COLOR_BACKGROUND = (255, 255, 255)

# 入力画像（クリックで順番に切り替え）
IMAGE_PATHS = [
    "images/test1.png",
    "images/test2.png",
    "images/test3.png",
]

# シミュレーション設定
PARTICLE_COUNT = 50      # パーティクル数（毎フレームこの数に収束）
STEPS_PER_FRAME = 5      # 1フレームあたりのサブステップ数
START_STOPPED = False

# パーティクル物理パラメータ（スポーン時に各パーティクルへコピー）
DAMPENING_FACTOR = 0.9999  # 速度減衰係数 (0, 1]
MAX_SPEED = 3.0            # px/step
DEFAULT_VELOCITY = (0.0, 0.0)

# 描画パラメータ
DRAW_ALPHA = 50          # 通常ストロークの不透明度 (0-255)
DRAW_WEIGHT = 1.0        # 通常ストロークの太さ (px)
DROP_RATE = 0.004        # インク溜まり（ドロップ）の発生確率 / paint呼び出し
DROP_ALPHA = 150         # ドロップの不透明度
DROP_MAX_SIZE = 6.0      # ドロップ太さの上限 (px)

# フェード（描いた線の下の画素を明るくする量）
FADE_DELTA = 50

# ビヘイビア既定値
ATTRACTION_KERNEL_SIZE = 5
ATTRACTION_FORCE_FACTOR = 1.0
NOISE_SCALE = 0.01
NOISE_INFLUENCE = 0.05
NOISE_TIME_FACTOR = 0.01
NOISE_ANGLE_SPREAD = 10.0   # ノイズ値を角度に写す倍率（0〜2πを満遍なく使うため）
NOISE_OCTAVES = 4
NOISE_FALLOFF = 0.5
BOUNDS_INSET = 20
BOUNDS_FORCE_FACTOR = 0.25
MAX_LIFE = 100              # 更新回数
MAX_LIFE_JITTER = 0.25      # 寿命のばらつき（±25%）
COLOR_CHANGE_RATE = 0.005
COLOR_KERNEL_SIZE = 3

# ビヘイビアの補助テーブル掃除の閾値（particle_count の何倍で掃除するか）
PURGE_FACTOR = 2

# スポーン
DARK_PIXEL_THRESHOLD = 35   # 明度(%)がこれ未満の画素からスポーン
SPAWN_MAX_ATTEMPTS = 1000

# ロギング
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = None             # 例: "logs/imagesketcher.log"
LOG_THROTTLE_FRAMES = 300   # フレーム統計のDEBUG出力間隔


class PaintStyle(Enum):
    """描画スタイル（パーティクル既定値のプリセット）"""
    PEN = auto()    # 細く薄い線、ドロップなし
    INK = auto()    # 標準（にじみあり）
    WASH = auto()   # 太く淡い線、ドロップ多め


# 各スタイルのパーティクル既定値
STYLE_PRESETS = {
    PaintStyle.PEN: {
        'draw_weight': 1.0,
        'draw_alpha': 40,
        'drop_rate': 0.0,
        'drop_alpha': DROP_ALPHA,
        'drop_max_size': 1.0,
        'max_speed': 2.0,
        'dampening_factor': 0.999,
    },
    PaintStyle.INK: {
        'draw_weight': DRAW_WEIGHT,
        'draw_alpha': DRAW_ALPHA,
        'drop_rate': DROP_RATE,
        'drop_alpha': DROP_ALPHA,
        'drop_max_size': DROP_MAX_SIZE,
        'max_speed': MAX_SPEED,
        'dampening_factor': DAMPENING_FACTOR,
    },
    PaintStyle.WASH: {
        'draw_weight': 4.0,
        'draw_alpha': 15,
        'drop_rate': 0.02,
        'drop_alpha': 60,
        'drop_max_size': 12.0,
        'max_speed': 4.0,
        'dampening_factor': 0.98,
    },
}
