# -*- coding: utf-8 -*-

#pragma pylint=off

# Credits
__author__ =        'George Flanagin'
__copyright__ =     'Copyright 2017 George Flanagin'
__credits__ =       'None. This idea has been around forever.'
__version__ =       '2.0'
__maintainer__ =    'George Flanagin'
__email__ =         'me+undeux@georgeflanagin.com'
__status__ =        'continual development.'
__license__ =       'MIT'

import typing
from   typing import *

import collections
from   concurrent.futures import ThreadPoolExecutor
import time

import calchashes
from   deuxlogger import DeuxLogger
from   fileclass import FileRecord
import fsgenerators
from   hash import PARTIAL_BYTES
from   scanerrors import ScanError, NoRootsGiven

logger = DeuxLogger()


# The Guido hack (which we will not need in 3.8!)
class SizeBuckets: pass

class SizeBuckets(collections.defaultdict):
    """
    A SizeBuckets is a defaultdict with list values, keyed by the
    size of the files. Two of them can be combined with the <<
    operator, which appends the lists of the right hand side onto
    the left.
    """
    def __init__(self, records:Iterable[FileRecord]=()) -> None:
        collections.defaultdict.__init__(self, list)
        for r in records:
            self[r.size].append(r)


    def __lshift__(self, other:collections.defaultdict) -> SizeBuckets:
        for k, v in other.items():
            self[k].extend(v)
        return self


    @property
    def singletons(self) -> List[FileRecord]:
        """
        Files whose size is shared by no other file. They must be
        unique, and we never need to look inside them.
        """
        return [ v[0] for v in self.values() if len(v) == 1 ]


    @property
    def candidates(self) -> List[List[FileRecord]]:
        return [ v for v in self.values() if len(v) > 1 ]


def bucket_by_size(records:Iterable[FileRecord]) -> SizeBuckets:
    """
    Files that differ in size are necessarily different files. This
    is the step that does most of the work; most files in most trees
    have a size that no other file has.
    """
    buckets = SizeBuckets(records)
    logger.info(f"{len(buckets)} distinct lengths, "
        f"{len(buckets.candidates)} of them shared.")
    return buckets


class ScanResult(NamedTuple):
    """
    What the engine found. The records are final, and the "shared"
    and "unique" views are only a matter of looking at them.
    """
    records: List[FileRecord]
    errors: List[ScanError]

    @property
    def shared(self) -> List[FileRecord]:
        return [ r for r in self.records if len(r.paths) > 1 ]

    @property
    def unique(self) -> List[FileRecord]:
        return [ r for r in self.records if len(r.paths) == 1 ]

    @property
    def total_files(self) -> int:
        """
        Every name, counting each copy of a duplicate.
        """
        return sum(len(r.paths) for r in self.records)

    @property
    def total_bytes(self) -> int:
        return sum(r.size * len(r.paths) for r in self.records)

    @property
    def distinct_bytes(self) -> int:
        """
        What the files would occupy if each content were kept once.
        """
        return sum(r.size for r in self.records)


def aggregate(singletons:Iterable[FileRecord],
    resolved:Iterable[FileRecord],
    *errors:Iterable[ScanError]) -> ScanResult:
    """
    Put the final records together. There is no more comparison
    to do by the time we get here.
    """
    records = list(singletons)
    records.extend(resolved)
    problems = [ e for batch in errors for e in batch ]
    return ScanResult(records, problems)


def find_duplicates(roots:Iterable[str],
    ignore:Iterable[str]=(),
    min_size:int=0,
    *,
    workers:int=None,
    partial_bytes:int=PARTIAL_BYTES,
    verify:bool=False) -> ScanResult:
    """
    Find out which files under the roots have the same content.

    roots         -- directories to look through. At least one.
    ignore        -- directory names, or directory paths, to skip.
    min_size      -- files smaller than this are not considered at all.
    workers       -- number of threads for walking and hashing. The
                        default is whatever ThreadPoolExecutor prefers.
    partial_bytes -- length of the leading part of each file that
                        gets hashed first.
    verify        -- compare byte for byte after a full hash match.

    returns -- a ScanResult with every file that was considered in
        exactly one record, and the problems found along the way.
    """
    roots = [ _ for _ in (roots or ()) if _ ]
    if not roots: raise NoRootsGiven()
    if min_size < 0: raise ValueError(f"min_size cannot be negative: {min_size}")

    start_time = time.time()
    logger.info(f"scan begun on {roots}")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='deuxdir') as pool:
        records, walk_errors = fsgenerators.walk_roots(roots, ignore, min_size, pool)

        ###
        # Bucketing needs to see every file, so the walks must all be
        # finished before we get here.
        ###
        buckets = bucket_by_size(records)
        resolved, hash_errors = calchashes.resolve_buckets(buckets.candidates,
            pool, partial_bytes=partial_bytes, verify=verify)

    result = aggregate(buckets.singletons, resolved, walk_errors, hash_errors)
    logger.info(f"scan finished in {round(time.time()-start_time, 3)} seconds: "
        f"{len(result.records)} distinct contents, {len(result.shared)} shared, "
        f"{len(result.errors)} errors.")
    return result
