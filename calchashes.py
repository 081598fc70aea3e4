# -*- coding: utf-8 -*-
"""
Sort out which of the files that share a size also share their
content, reading as little of each file as we can.

The first pass hashes the first few blocks of every candidate. A
file whose partial hash matches nobody else's is unique; nothing
more needs to be read. Only the files that collide on the partial
hash are read all the way through, and the ones whose full hashes
match are merged into one record.
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

###
# imports and objects that are a part of this project
###
from   deuxlogger import DeuxLogger
from   fileclass import FileRecord, HashState
import hash
from   scanerrors import ScanError, FileUnreadable

logger = DeuxLogger()

###
# Credits
###
__author__ = 'George Flanagin'
__copyright__ = 'Copyright 2022, University of Richmond'
__credits__ = None
__version__ = 0.2
__maintainer__ = 'George Flanagin'
__email__ = 'gflanagin@richmond.edu'
__status__ = 'in progress'
__license__ = 'MIT'


def _run(pool:Executor, func:Callable, items:Iterable) -> Iterable:
    return pool.map(func, items) if pool is not None else map(func, items)


def fingerprint(record:FileRecord, how_much:int=hash.PARTIAL_BYTES) -> Optional[ScanError]:
    """
    Hash the first how_much bytes of the record's file.

    returns -- None if all went well, otherwise the reason why not.
    """
    if record.state is not HashState.UNHASHED: return None
    try:
        value, bytes_read = hash.partial_hash(record.name, how_much)
    except FileUnreadable as e:
        logger.warning(f"partial hash failed: {e}")
        return e

    record.set_partial_hash(value, bytes_read)
    logger.debug(f"{record.name} partial {value:032x} over {bytes_read} bytes")
    return None


def fullfingerprint(record:FileRecord) -> Optional[ScanError]:
    """
    Hash the whole file, unless the partial hash already did.
    """
    if record.state is HashState.FULL: return None
    try:
        value = hash.full_hash(record.name)
    except FileUnreadable as e:
        logger.warning(f"full hash failed: {e}")
        return e

    record.set_full_hash(value)
    logger.debug(f"{record.name} full {value:032x}")
    return None


def group_by(records:Iterable[FileRecord], key:Callable) -> Dict[Any, List[FileRecord]]:
    """
    A fresh grouping every time; records are never moved from one
    group to another.
    """
    groups = collections.defaultdict(list)
    for r in records:
        groups[key(r)].append(r)
    return groups


def split_by_bytes(group:List[FileRecord]) -> Tuple[List[List[FileRecord]], List[ScanError]]:
    """
    Compare the members of a group that all have the same full hash,
    byte for byte, against the first member of each cluster found so
    far. A file that cannot be read is dropped.
    """
    clusters = []
    errors = []
    for r in group:
        i = 0
        while i < len(clusters):
            c = clusters[i]
            try:
                if hash.same_bytes(c[0].name, r.name):
                    c.append(r)
                    break
            except FileUnreadable as e:
                errors.append(e)
                if e.path == r.name: break
                # The cluster's first member is the one that let us
                # down. Drop it, and try the next one in its place.
                c.pop(0)
                if not c: clusters.pop(i)
                continue
            i += 1
        else:
            clusters.append([r])

    return clusters, errors


def resolve_buckets(buckets:Iterable[List[FileRecord]],
    pool:Executor=None,
    partial_bytes:int=hash.PARTIAL_BYTES,
    verify:bool=False) -> Tuple[List[FileRecord], List[ScanError]]:
    """
    buckets       -- groups of two or more records, all of one size
                        within each group.
    pool          -- an Executor for the reads. Without one, the files
                        are read one at a time.
    partial_bytes -- how much of each file goes into the partial hash.
    verify        -- if True, a full hash match is checked byte for
                        byte before the records are merged.

    returns -- the resolved records (unique and merged), and any
        errors. A file that could not be read is not among the
        records.
    """
    if partial_bytes <= 0:
        raise ValueError(f"partial_bytes must be positive, not {partial_bytes}")

    errors = []
    candidates = [ r for b in buckets for r in b ]
    logger.info(f"{len(candidates)} files need a partial hash.")

    ###
    # Pass 1: the partial hash of every candidate, then a join.
    ###
    readable = []
    for r, problem in zip(candidates, _run(pool, lambda r : fingerprint(r, partial_bytes), candidates)):
        if problem is None:
            readable.append(r)
        else:
            errors.append(problem)

    partial_groups = group_by(readable, lambda r : (r.size, r.partial_hash))
    resolved = [ g[0] for g in partial_groups.values() if len(g) == 1 ]
    collisions = [ g for g in partial_groups.values() if len(g) > 1 ]
    logger.info(f"{len(resolved)} files are unique by partial hash; "
        f"{len(collisions)} groups need a full hash.")

    ###
    # Pass 2: the full hash of everything that collided, then a join.
    ###
    suspects = [ r for g in collisions for r in g ]
    failed = set()
    for r, problem in zip(suspects, _run(pool, fullfingerprint, suspects)):
        if problem is not None:
            errors.append(problem)
            failed.add(id(r))

    full_groups = []
    for g in collisions:
        survivors = [ r for r in g if id(r) not in failed ]
        full_groups.extend(group_by(survivors, lambda r : r.full_hash).values())

    ###
    # Optionally, trust nothing.
    ###
    if verify:
        logger.info(f"verifying {sum(len(g) > 1 for g in full_groups)} groups byte for byte.")
        checked = []
        for g, (clusters, problems) in zip(full_groups,
                _run(pool, lambda g : split_by_bytes(g) if len(g) > 1 else ([g], []), full_groups)):
            errors.extend(problems)
            checked.extend(clusters)
        full_groups = checked

    for g in full_groups:
        keeper = g[0]
        for other in g[1:]:
            keeper.merge(other)
        resolved.append(keeper)

    logger.info(f"{sum(r.shared for r in resolved)} groups of duplicates found.")
    return resolved, errors
