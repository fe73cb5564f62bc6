"""imagesketcher メインエントリーポイント（pygame ホスト）"""

import logging
import pygame
from imagesketcher import config
from imagesketcher.input.events import EventDispatcher
from imagesketcher.rendering.canvas import PygameCanvas
from imagesketcher.rendering.pixel_buffer import PixelBuffer
from imagesketcher.sketcher import Sketcher
from imagesketcher.spawn import dark_pixel_spawn
from imagesketcher.utils import setup_logging

logger = logging.getLogger(__name__)


def load_images(paths: list[str]) -> list[PixelBuffer]:
    """
    入力画像をすべて読み込む（1枚でも失敗したら例外をそのまま送出）
    """
    return [PixelBuffer.load(path) for path in paths]


class ImageCycler:
    """クリックごとに対象画像を順番に切り替える"""

    def __init__(self, sketcher: Sketcher, images: list[PixelBuffer]):
        self.sketcher = sketcher
        self.images = images
        self.index = 0

    def next_image(self, x: float = None, y: float = None):
        self.index = (self.index + 1) % len(self.images)
        self.sketcher.set_target_image(self.images[self.index])
        logger.info("Switched to image %d/%d", self.index + 1, len(self.images))


def main():
    """メインループ"""
    setup_logging()
    logger.info("--- imagesketcher starting ---")

    pygame.init()

    # 画像読み込み（preload 相当、失敗したら終了）
    try:
        images = load_images(config.IMAGE_PATHS)
    except (FileNotFoundError, pygame.error) as e:
        logger.error("FATAL: could not load images: %s", e)
        pygame.quit()
        return

    sketcher = Sketcher(
        images[0],
        width=config.SCREEN_WIDTH,
        height=config.SCREEN_HEIGHT,
        spawn_generator=dark_pixel_spawn(),
    )
    cycler = ImageCycler(sketcher, images)
    sketcher.on_click = cycler.next_image

    # 'b' で描画レイヤーと作業バッファの表示を切り替え、'c' でキャンバス消去
    view_state = {'show_buffer': False}

    def on_key(key: str):
        if key in ('b', 'B'):
            view_state['show_buffer'] = not view_state['show_buffer']
        elif key in ('c', 'C'):
            sketcher.request_clear()

    sketcher.on_key = on_key

    sketcher.preload()
    sketcher.setup()

    screen = pygame.display.set_mode((sketcher.width, sketcher.height))
    pygame.display.set_caption("imagesketcher")
    clock = pygame.time.Clock()

    canvas = PygameCanvas(sketcher.width, sketcher.height)
    dispatcher = EventDispatcher(sketcher)
    buffer_surface = None

    running = True
    while running:
        # --- イベント処理 ---
        running = dispatcher.process(pygame.event.get())

        # --- 更新 ---
        sketcher.tick(canvas)

        # --- 描画 ---
        if view_state['show_buffer']:
            if sketcher.consume_dirty() or buffer_surface is None:
                buffer_surface = sketcher.buffer.to_surface()
            screen.fill(config.COLOR_BACKGROUND)
            screen.blit(buffer_surface, (0, 0))
        else:
            canvas.render(screen, config.COLOR_BACKGROUND)

        pygame.display.flip()
        clock.tick(config.FPS)

    pygame.quit()
    logger.info("--- imagesketcher shutting down (%d frames) ---", sketcher.frame_count)


if __name__ == "__main__":
    main()
