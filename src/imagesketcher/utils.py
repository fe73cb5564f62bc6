"""
ユーティリティ（ロギング設定）

物理や描画に属さない、アプリケーション全体で使う補助関数。
"""
import logging
import logging.handlers
import os
from imagesketcher import config


def setup_logging(level: str = config.LOG_LEVEL, log_file: str = config.LOG_FILE,
                  log_format: str = config.LOG_FORMAT) -> None:
    """
    ルートロガーを設定する

    コンソールへ出力し、log_file が指定されていればローテーションするファイルにも書く
    （1MBで切り替え、5世代保持）。
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # 重複出力を避けるため既存ハンドラを外す
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug("Log level set to %s, log file: %s", level.upper(), log_file)
