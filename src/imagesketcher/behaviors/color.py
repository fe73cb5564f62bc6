"""色を変化させるビヘイビア"""

import math
from imagesketcher import config
from imagesketcher.behaviors.base import Behavior, check_number, parse_kernel_size
from imagesketcher.rendering.color import blend


class ColorEvolution(Behavior):
    """
    周囲の平均色へパーティクルの色を指数的に近づける

    color ← (1 - change_rate)·color + change_rate·平均色（アルファは維持）
    有効な画素が1つもない近傍では色を変えない。
    """

    name = "color_evolution"

    def __init__(self, change_rate: float = config.COLOR_CHANGE_RATE, kernel_size=config.COLOR_KERNEL_SIZE):
        self.change_rate = check_number("change_rate", change_rate, minimum=0.0, maximum=1.0)
        self.kernel_width, self.kernel_height = parse_kernel_size(kernel_size)

    def update(self, sketcher):
        pass

    def apply_to_particle(self, particle):
        cx = math.floor(particle.position[0])
        cy = math.floor(particle.position[1])
        half_w = self.kernel_width // 2
        half_h = self.kernel_height // 2

        view, _, _ = particle.buffer.window(cx - half_w, cy - half_h, cx + half_w + 1, cy + half_h + 1)
        if view.size == 0:
            return

        average = view[:, :, :3].reshape(-1, 3).mean(axis=0)
        particle.color = blend(particle.color, average, self.change_rate)

    def __repr__(self):
        return (f"ColorEvolution(change_rate={self.change_rate}, "
                f"kernel_size=({self.kernel_width}, {self.kernel_height}))")
