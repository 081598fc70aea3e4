# -*- coding: utf-8 -*-
"""
Decorators that are shared across the project.
"""
import typing
from   typing import *

###
# Other standard distro imports
###
import functools

###
# imports and objects that are a part of this project
###
from   deuxlogger import DeuxLogger

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

logger = DeuxLogger()


def trap(func:Callable) -> Callable:
    """
    Write down anything that escapes from func, with the stack, and
    then let it keep going. Whoever called func gets to decide what
    to do about it.
    """
    @functools.wraps(func)
    def trapped(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)

        except Exception as e:
            logger.exception(f"{func.__name__} raised {type(e).__name__}: {e}")
            raise

    return trapped
