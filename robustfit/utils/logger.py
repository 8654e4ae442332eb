import logging
import sys
from pathlib import Path


def setup_logger(name='robustfit', log_level=logging.INFO, log_file=None):
    """ 为脚本配置控制台（以及可选的文件）日志输出

    库内部的模块只通过 logging.getLogger(__name__) 记录日志，不会自行添加 handler。

    参数
    ----------
    name : str
        logger 名称
    log_level : int
        日志等级
    log_file : str 可选
        日志文件路径

    返回
    ----------
    logging.Logger
        配置好的 logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 避免重复调用时添加多个 handler
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
