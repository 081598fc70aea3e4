# -*- coding: utf-8 -*-
"""
Convenience class to allow for hashing with the fastest algorithm
available.
"""
import typing
from   typing import *

min_py = (3, 11)

###
# Standard imports, starting with os and sys
###
from   io import DEFAULT_BUFFER_SIZE
import os
import sys
if sys.version_info < min_py:
    print(f"This program requires Python {min_py[0]}.{min_py[1]}, or higher.")
    sys.exit(os.EX_SOFTWARE)

###
# Installed libraries.
###
import xxhash

###
# imports and objects that are a part of this project
###
from   scanerrors import FileUnreadable

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

# Each read is "large" so the OS read-ahead does its job and we
# make fewer system calls. The partial hash is four 4K blocks.
BLOCK_SIZE = 4096
PARTIAL_BYTES = BLOCK_SIZE * 4
CHUNK_SIZE = DEFAULT_BUFFER_SIZE << 4


class Hash:
    """
    One hasher per file. Use a new Hash object for every file; the
    digest accumulates.
    """

    def __init__(self, chunk_size:int=CHUNK_SIZE) -> None:
        self.hasher = xxhash.xxh3_128()
        self.chunk_size = chunk_size
        self.bytes_read = 0


    def hash_file(self, filename:str, how_much:int=0) -> int:
        """
        Do a partial or complete hash of filename.

        filename -- the name of the file we want to hash.
        how_much -- defaults to 0, which will mean the entire file.

        returns -- the integer digest. self.bytes_read says how much
            of the file went into it.

        raises -- FileUnreadable if the file cannot be opened or read.
        """
        try:
            with open(filename, 'rb') as f:
                if not how_much:
                    # Read it all.
                    while (segment := f.read(self.chunk_size)):
                        self.update(segment)
                else:
                    # Read some.
                    remaining = how_much
                    while remaining and (segment := f.read(min(self.chunk_size, remaining))):
                        self.update(segment)
                        remaining -= len(segment)

        except OSError as e:
            raise FileUnreadable(filename, e) from e

        return self.hasher.intdigest()


    def update(self, segment:bytes) -> None:
        self.hasher.update(segment)
        self.bytes_read += len(segment)


def partial_hash(filename:str, how_much:int=PARTIAL_BYTES) -> Tuple[int, int]:
    """
    returns -- (digest of the leading how_much bytes, bytes actually read)
    """
    h = Hash()
    value = h.hash_file(filename, how_much)
    return value, h.bytes_read


def full_hash(filename:str) -> int:
    return Hash().hash_file(filename)


def same_bytes(this:str, that:str, chunk_size:int=CHUNK_SIZE) -> bool:
    """
    Compare two files a chunk at a time. Used only when a matching
    full hash is not considered proof enough.

    raises -- FileUnreadable naming whichever file let us down.
    """
    try:
        f = open(this, 'rb')
    except OSError as e:
        raise FileUnreadable(this, e) from e

    with f:
        try:
            g = open(that, 'rb')
        except OSError as e:
            raise FileUnreadable(that, e) from e

        with g:
            while True:
                try:
                    a = f.read(chunk_size)
                except OSError as e:
                    raise FileUnreadable(this, e) from e
                try:
                    b = g.read(chunk_size)
                except OSError as e:
                    raise FileUnreadable(that, e) from e

                if a != b: return False
                if not a: return True
