"""入力イベント処理"""

import pygame


class EventDispatcher:
    """
    pygame のイベントをスケッチャーの入力エントリポイントへ振り分ける

    - 左クリック → sketcher.on_mouse_click(x, y)
    - キー入力   → sketcher.on_key_press(文字)
    - ウィンドウを閉じる / Esc → 終了要求
    """

    def __init__(self, sketcher):
        self.sketcher = sketcher
        self.quit_requested = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        イベントを1つ処理する。

        Returns:
            実行を続けるなら True、終了要求なら False
        """
        if event.type == pygame.QUIT:
            self.quit_requested = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            x, y = event.pos
            self.sketcher.on_mouse_click(x, y)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.quit_requested = True
            else:
                key = getattr(event, 'unicode', '')
                if key:
                    self.sketcher.on_key_press(key)
        return not self.quit_requested

    def process(self, events) -> bool:
        """イベント列をまとめて処理（終了要求があれば False）"""
        for event in events:
            self.handle_event(event)
        return not self.quit_requested
