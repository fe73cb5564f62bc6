"""ロギング設定のテスト"""

import logging
import logging.handlers
import pytest
from imagesketcher.utils import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_only(restore_root_logger):
    setup_logging(level="debug", log_file=None)
    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_rotating_file(restore_root_logger, tmp_path):
    """ログファイル指定時はディレクトリを作ってローテーション出力する"""
    log_file = tmp_path / "logs" / "sketch.log"
    setup_logging(level="INFO", log_file=str(log_file))
    root = restore_root_logger

    file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(file_handlers) == 1
    logging.getLogger("imagesketcher.test").info("hello")
    file_handlers[0].flush()
    assert "hello" in log_file.read_text()


def test_repeated_setup_does_not_duplicate(restore_root_logger):
    setup_logging()
    setup_logging()
    assert len(restore_root_logger.handlers) == 1
