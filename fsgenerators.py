# -*- coding: utf-8 -*-
"""
Walk the directory trees and find the files that are worth
comparing.
"""
import typing
from   typing import *

min_py = (3, 11)

###
# Standard imports, starting with os and sys
###
import os
import sys
if sys.version_info < min_py:
    print(f"This program requires Python {min_py[0]}.{min_py[1]}, or higher.")
    sys.exit(os.EX_SOFTWARE)

###
# Other standard distro imports
###
import collections
from   concurrent.futures import Executor
import errno
import stat

###
# imports and objects that are a part of this project
###
from   deuxlogger import DeuxLogger
from   fileclass import FileRecord
from   scanerrors import ScanError, RootUnavailable, DirectoryUnreadable, FileUnreadable

###
# Global objects and initializations
###
logger = DeuxLogger()

###
# Credits
###
__author__ = 'George Flanagin'
__copyright__ = 'Copyright 2023'
__credits__ = None
__version__ = 0.2
__maintainer__ = 'George Flanagin'
__email__ = ['gflanagin@richmond.edu']
__status__ = 'in progress'
__license__ = 'MIT'


def expandall(s:str) -> str:
    """
    Expand all the user vars into an absolute path name. If the
    argument happens to be None, it is OK.
    """
    return s if s is None else os.path.realpath(os.path.abspath(os.path.expandvars(os.path.expanduser(s))))


class IgnoreSet:
    """
    The directories not to descend into. Anything without a path
    separator is a bare directory name and matches wherever it
    appears; anything else is a location, and matches only that
    one directory.
    """

    def __init__(self, ignore:Iterable[str]=()) -> None:
        ignore = [ _ for _ in (ignore or ()) if _ ]
        self.names = frozenset(_ for _ in ignore if os.sep not in _)
        self.paths = frozenset(expandall(_) for _ in ignore if os.sep in _)


    def __contains__(self, path:str) -> bool:
        return os.path.basename(path) in self.names or path in self.paths


    def __bool__(self) -> bool:
        return bool(self.names or self.paths)


def walk_root(root:str,
    ignore:IgnoreSet=None,
    min_size:int=0) -> Tuple[List[Tuple[str, FileRecord]], List[ScanError]]:
    """
    Find every regular file below root.

    root     -- the name of a directory.
    ignore   -- directories whose subtrees are skipped.
    min_size -- files smaller than this are not even recorded.

    returns -- a list of (resolved name, FileRecord) in the order
        the files were found, and a list of the problems.
    """
    ignore = ignore if ignore is not None else IgnoreSet()
    found = []
    errors = []

    root = expandall(root)
    try:
        info = os.stat(root)
        if not stat.S_ISDIR(info.st_mode):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), root)
    except OSError as e:
        logger.warning(f"{root} is not a directory we can scan: {e}")
        return found, [RootUnavailable(root, e)]

    if root in ignore:
        logger.info(f"{root} is ignored.")
        return found, errors

    ###
    # Directories are known by their device and inode, not by their
    # names, so that no directory is ever entered twice.
    ###
    visited = {(info.st_dev, info.st_ino)}
    pending = collections.deque([root])
    too_small = 0

    while pending:
        d = pending.popleft()
        try:
            with os.scandir(d) as it:
                entries = list(it)
        except OSError as e:
            logger.warning(f"cannot list {d}: {e}")
            errors.append(RootUnavailable(d, e) if d == root else DirectoryUnreadable(d, e))
            continue

        for entry in entries:
            try:
                # Links to directories are never followed.
                if entry.is_dir(follow_symlinks=False):
                    if entry.path in ignore:
                        logger.debug(f"ignoring {entry.path}")
                        continue
                    dinfo = entry.stat(follow_symlinks=False)
                    if (dinfo.st_dev, dinfo.st_ino) in visited: continue
                    visited.add((dinfo.st_dev, dinfo.st_ino))
                    pending.append(entry.path)
                    continue

                # Links to files are followed, and have the size of
                # the target. Dangling links, fifos, etc. are not files.
                if not entry.is_file(): continue
                size = entry.stat().st_size

            except OSError as e:
                logger.warning(f"cannot stat {entry.path}: {e}")
                errors.append(FileUnreadable(entry.path, e))
                continue

            if size < min_size:
                too_small += 1
                continue

            found.append((os.path.realpath(entry.path), FileRecord(entry.path, size)))

    logger.info(f"{root}: {len(found)} files, {too_small} too small, {len(errors)} errors.")
    return found, errors


def walk_roots(roots:Iterable[str],
    ignore:Iterable[str]=(),
    min_size:int=0,
    pool:Executor=None) -> Tuple[List[FileRecord], List[ScanError]]:
    """
    Walk each of the roots, perhaps at the same time, and put the
    results together. A file that can be reached from more than one
    root (or by a link as well as by its name) is only recorded
    the first time it is seen.

    pool -- an Executor to run the walks on. Without one, the
        roots are walked one after the other.

    returns -- the FileRecords, and the errors.
    """
    ignore = ignore if isinstance(ignore, IgnoreSet) else IgnoreSet(ignore)
    roots = list(roots)
    walk = lambda r : walk_root(r, ignore, min_size)
    results = pool.map(walk, roots) if pool is not None else map(walk, roots)

    records = []
    errors = []
    seen = set()
    for found, problems in results:
        errors.extend(problems)
        for realname, record in found:
            if realname in seen: continue
            seen.add(realname)
            records.append(record)

    logger.info(f"{len(records)} distinct files found under {len(roots)} roots.")
    return records, errors
