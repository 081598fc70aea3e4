# -*- coding: utf-8 -*-
"""
A file logger that every module in the project can share. The
program builds one with a logfile and a level; the library modules
build one with no arguments and simply get the same named logger.
"""
import typing
from   typing import *

###
# Standard imports, starting with os and sys
###
import os
import sys

###
# Other standard distro imports
###
import logging
from   logging.handlers import RotatingFileHandler

###
# Credits
###
__author__ = 'George Flanagin'
__copyright__ = 'Copyright 2025'
__credits__ = None
__version__ = 0.1
__maintainer__ = 'George Flanagin'
__email__ = ['gflanagin@richmond.edu']
__status__ = 'in progress'
__license__ = 'MIT'

LOGGER_NAME = 'deuxdir'
LOG_FORMAT = "#%(levelname)-8s [%(asctime)s] (%(process)d) %(module)s: %(message)s"


class DeuxLogger:
    """
    Thin wrapper around logging.Logger. Anything that is not defined
    here (debug, info, warning, ...) goes to the underlying logger.

    logfile -- where to write. If None, no handlers are attached.
    level   -- the usual logging levels. The stderr handler only
        ever shows WARNING and worse.
    """

    def __init__(self, logfile:str=None, level:int=logging.INFO,
        max_bytes:int=1<<24, backups:int=2) -> None:

        self.logger = logging.getLogger(LOGGER_NAME)
        if logfile is None: return

        self.logfile = logfile
        self.logger.setLevel(level)
        for h in list(self.logger.handlers):
            self.logger.removeHandler(h)
            h.close()

        formatter = logging.Formatter(LOG_FORMAT)
        file_handler = RotatingFileHandler(logfile,
            maxBytes=max_bytes, backupCount=backups, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        self.logger.addHandler(file_handler)

        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        console.setLevel(max(level, logging.WARNING))
        self.logger.addHandler(console)
        self.logger.propagate = False


    def __getattr__(self, k:str) -> object:
        return getattr(self.logger, k)


    @property
    def level(self) -> int:
        return self.logger.getEffectiveLevel()
