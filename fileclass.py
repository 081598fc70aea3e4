# -*- coding: utf-8 -*-
"""
Class to assist with the process of locating duplicate files.
"""
import typing
from   typing import *

###
# Standard imports, starting with os and sys
###
min_py = (3, 11)
import os
import sys
if sys.version_info < min_py:
    print(f"This program requires Python {min_py[0]}.{min_py[1]}, or higher.")
    sys.exit(os.EX_SOFTWARE)

###
# Other standard distro imports
###
import enum

###
# Credits
###
__author__ = 'George Flanagin'
__copyright__ = 'Copyright 2024, University of Richmond'
__credits__ = None
__version__ = 0.2
__maintainer__ = 'George Flanagin'
__email__ = f'gflanagin@richmond.edu'
__status__ = 'in progress'
__license__ = 'MIT'


class HashState(enum.IntEnum):
    """
    How much we know about a file's content. The values only
    ever go up.
    """
    UNHASHED = 0
    PARTIAL = 1
    FULL = 2


class FileRecord: pass
class FileRecord:
    """
    FileRecord is one or more names that we believe point to the
    same content. It starts life with exactly one name, and gains
    more only when another record's full hash matches its own.

    Let's say our records are r1 and r2

          Expression    |   True when ....
    --------------------+----------------------------------------------
        int(r1)         | the size of the file(s), in bytes.
    --------------------+----------------------------------------------
        len(r1)         | the number of names in the record.
    --------------------+----------------------------------------------
        r1 & r2         | r1 and r2 have the same size and the same
                        |   partial hash.
    --------------------+----------------------------------------------
        r1 @ r2         | r1 and r2 have the same size and the same
                        |   full hash. I.e., they are duplicates.
    --------------------+----------------------------------------------

    """

    __slots__ = {
        'paths' : "names believed to share this content, in discovery order",
        '_size' : "the size from os.stat(), fixed when the file is found",
        'partial_hash' : "the integer representation of the file's partial hash",
        'bytes_read' : "how many leading bytes went into the partial hash",
        'full_hash' : "the integer representation of the file's full hash"
        }

    __values__ = (None, 0, None, 0, None)
    __defaults__ = dict(zip(__slots__, __values__))


    def __init__(self, path:str, size:int) -> None:
        for k, v in FileRecord.__defaults__.items():
            setattr(self, k, v)

        if size < 0:
            raise ValueError(f"{path} cannot have a negative size")
        self.paths = [path]
        self._size = size


    @property
    def size(self) -> int:
        return self._size


    @property
    def name(self) -> str:
        """
        The first name we saw. Any of them would do, but this one
        is the one we open when we hash.
        """
        return self.paths[0]


    @property
    def state(self) -> HashState:
        if self.full_hash is not None: return HashState.FULL
        if self.partial_hash is not None: return HashState.PARTIAL
        return HashState.UNHASHED


    @property
    def shared(self) -> bool:
        return len(self.paths) > 1


    def set_partial_hash(self, value:int, bytes_read:int) -> None:
        """
        Record the hash of the first bytes_read bytes. If that was
        the whole file, then we also know the full hash, and there
        is no reason to read the file again.
        """
        if self.state is not HashState.UNHASHED:
            raise ValueError(f"{self.name} already has a {self.state.name} hash")

        self.partial_hash = value
        self.bytes_read = bytes_read
        if bytes_read >= self._size:
            self.full_hash = value


    def set_full_hash(self, value:int) -> None:
        if self.full_hash is not None and self.full_hash != value:
            raise ValueError(f"{self.name} already has a different full hash")
        self.full_hash = value


    def merge(self, other:FileRecord) -> FileRecord:
        """
        Take on the names from other. This is only allowed for
        records that we have already decided are the same content.
        """
        if not isinstance(other, FileRecord):
            raise TypeError(f"cannot merge {type(other).__name__} into a FileRecord")
        if not self @ other:
            raise ValueError(f"{other.name} is not a duplicate of {self.name}")

        for p in other.paths:
            if p not in self.paths: self.paths.append(p)
        return self


    def __str__(self) -> str:
        """
        This is what most people mean by the name.
        """
        return os.path.basename(self.name)


    def __repr__(self) -> str:
        return f"FileRecord({self.paths!r}, size={self._size}, state={self.state.name})"


    def __int__(self) -> int:
        """
        return the file's size as an integer.
        """
        return self._size


    def __len__(self) -> int:
        return len(self.paths)


    def __and__(self, other:FileRecord) -> bool:
        if not isinstance(other, FileRecord): return NotImplemented
        if self._size != other._size: return False
        return self.partial_hash is not None and self.partial_hash == other.partial_hash


    def __matmul__(self, other:FileRecord) -> bool:
        if not isinstance(other, FileRecord): return NotImplemented
        if self._size != other._size: return False
        return self.full_hash is not None and self.full_hash == other.full_hash


    def as_dict(self) -> dict:
        """
        The part of the record that is worth writing down.
        """
        return {
            'partial_hash': None if self.partial_hash is None else format(self.partial_hash, '032x'),
            'full_hash': None if self.full_hash is None else format(self.full_hash, '032x'),
            'file_length': self._size,
            'file_paths': list(self.paths)
            }
