# -*- coding: utf-8 -*-
"""
The things that can go wrong while looking at a directory tree. None
of these stop a scan; they are collected and handed back alongside
the files that could be examined.
"""
import typing
from   typing import *

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


class ScanError(Exception):
    """
    A failure to stat, open, or read something at a particular path.

    path  -- the offending name.
    cause -- the OSError (usually) that got us here, or None.
    """
    kind = 'ScanError'

    def __init__(self, path:str, cause:Exception=None) -> None:
        Exception.__init__(self, path, cause)
        self.path = path
        self.cause = cause


    def __str__(self) -> str:
        reason = self.cause.strerror if isinstance(self.cause, OSError) and self.cause.strerror else self.cause
        return f"{self.kind}: {self.path}: {reason}"


    def as_dict(self) -> dict:
        return {'kind': self.kind, 'path': self.path,
            'cause': None if self.cause is None else str(self.cause)}


class RootUnavailable(ScanError):
    """
    One of the directories we were asked to scan is missing, is not
    a directory, or cannot be read.
    """
    kind = 'RootUnavailable'


class DirectoryUnreadable(ScanError):
    """
    A directory below one of the roots could not be listed. The
    subtree is skipped.
    """
    kind = 'DirectoryUnreadable'


class FileUnreadable(ScanError):
    """
    A file vanished, became unreadable, or raised an I/O error while
    we were looking at it.
    """
    kind = 'FileUnreadable'


class NoRootsGiven(ValueError):
    """
    There is nothing to scan. This is the caller's mistake, and it is
    the only condition that stops the engine before it starts.
    """
    def __init__(self) -> None:
        ValueError.__init__(self, "at least one root directory is required")
