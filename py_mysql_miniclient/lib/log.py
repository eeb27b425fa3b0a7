# coding=utf-8
import logging
import os
import sys
from logging.handlers import RotatingFileHandler


def init_logger(log_name=None, level=logging.INFO, logger=logging.getLogger('py_mysql_miniclient'), log_dir=None):
    """Log to stdout and to a rotating file under <log_dir>/<name>.log"""
    script_dir, name = os.path.split(os.path.abspath(sys.argv[0]))
    if log_name:
        name = log_name
    if log_dir is None:
        log_dir = os.path.join(os.path.dirname(script_dir), 'log')

    log_filename = os.path.join(log_dir, name.replace(".py", "") + '.log')
    fmt = logging.Formatter('%(asctime)s %(levelname)s [%(process)d] %(filename)s %(message)s ')

    if not os.path.isdir(log_dir):
        os.makedirs(log_dir)

    # 10M per file
    file_handler = RotatingFileHandler(log_filename, mode='a', maxBytes=10240000, backupCount=100,
                                       encoding="utf8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(fmt)
    logger.addHandler(stdout_handler)
    logger.setLevel(level)

    return logger
