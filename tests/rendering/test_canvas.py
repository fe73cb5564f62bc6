"""キャンバス実装のテスト"""
import pygame
pygame.init()

from imagesketcher.rendering.canvas import PygameCanvas, RecordingCanvas


def test_recording_canvas_commands():
    """描画命令が順番どおりに記録される"""
    canvas = RecordingCanvas()
    canvas.stroke((10, 20, 30, 40))
    canvas.stroke_weight(2)
    canvas.line(0, 1, 2, 3)
    canvas.clear()

    assert canvas.commands == [
        ("stroke", (10, 20, 30, 40)),
        ("stroke_weight", 2.0),
        ("line", (0.0, 1.0, 2.0, 3.0)),
        ("clear", None),
    ]
    assert canvas.lines == [((0.0, 1.0, 2.0, 3.0), (10, 20, 30, 40), 2.0)]
    assert canvas.clear_count == 1


def test_recording_canvas_reset():
    canvas = RecordingCanvas()
    canvas.line(0, 0, 1, 1)
    canvas.clear()
    canvas.reset()
    assert canvas.commands == []
    assert canvas.lines == []
    assert canvas.clear_count == 0


def test_pygame_canvas_draws_line():
    """線がペイントレイヤーに描かれる"""
    canvas = PygameCanvas(20, 20)
    canvas.stroke((255, 0, 0, 255))
    canvas.stroke_weight(1)
    canvas.line(2, 10, 17, 10)

    pixel = canvas.layer.get_at((10, 10))
    assert (pixel.r, pixel.g, pixel.b) == (255, 0, 0)
    assert pixel.a > 0
    assert canvas.layer.get_at((10, 2)).a == 0


def test_pygame_canvas_thick_line():
    """太線は端が丸められる（端点の画素も塗られる）"""
    canvas = PygameCanvas(30, 30)
    canvas.stroke((0, 0, 255, 200))
    canvas.stroke_weight(6)
    canvas.line(5, 15, 25, 15)

    assert canvas.layer.get_at((5, 15)).a > 0
    assert canvas.layer.get_at((25, 15)).a > 0


def test_pygame_canvas_clear():
    canvas = PygameCanvas(20, 20)
    canvas.stroke((0, 0, 0, 255))
    canvas.line(0, 0, 19, 19)
    canvas.clear()
    assert canvas.layer.get_at((5, 5)).a == 0


def test_pygame_canvas_render():
    """背景色の上にレイヤーが重なる"""
    canvas = PygameCanvas(20, 20)
    canvas.stroke((0, 0, 0, 255))
    canvas.line(0, 10, 19, 10)
    screen = pygame.Surface((20, 20))
    canvas.render(screen, (255, 255, 255))

    assert tuple(screen.get_at((5, 0)))[:3] == (255, 255, 255)
    assert tuple(screen.get_at((5, 10)))[:3] == (0, 0, 0)


def test_pygame_canvas_line_partly_outside():
    """画面外にはみ出す線でもエラーにならない"""
    canvas = PygameCanvas(10, 10)
    canvas.stroke((0, 255, 0, 255))
    canvas.line(-5, 5, 15, 5)
    assert canvas.layer.get_at((5, 5)).g == 255
