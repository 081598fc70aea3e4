# -*- coding: utf-8 -*-
"""
Turn a ScanResult into something a person (or another program)
can read, and put it where it was asked to go.
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
import json
import textwrap

###
# imports and objects that are a part of this project
###
from   deuxlib import ScanResult
from   deuxlogger import DeuxLogger
from   fileclass import FileRecord

logger = DeuxLogger()

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

BLOCKSIZES = {
    'B'  : (1, 'Bytes'),
    'K'  : (1<<10, 'Kilobytes'),
    'KB' : (1<<10, 'Kilobytes'),
    'M'  : (1<<20, 'Megabytes'),
    'MB' : (1<<20, 'Megabytes'),
    'G'  : (1<<30, 'Gigabytes'),
    'GB' : (1<<30, 'Gigabytes')
    }

VERBOSITIES = ('quiet', 'duplicates', 'all')
FORMATS = ('standard', 'json')
NO_OUTPUT = 'no'


def blocksize_of(unit:str) -> Tuple[int, str]:
    try:
        return BLOCKSIZES[unit.upper()]
    except KeyError as e:
        raise ValueError(f"unknown blocksize {unit}; choose from {tuple(BLOCKSIZES)}") from e


def disk_usage(r:FileRecord) -> int:
    return r.size * len(r.paths)


def summarize(result:ScanResult, blocksize:str='B') -> dict:
    """
    The four numbers everyone wants to see, scaled to blocksize.
    """
    divisor, unit = blocksize_of(blocksize)
    shared = result.shared
    unique = result.unique
    return {
        'unit': unit,
        'total_files': result.total_files,
        'total_size': result.total_bytes // divisor,
        'distinct_files': len(result.records),
        'distinct_size': result.distinct_bytes // divisor,
        'single_instance_files': len(unique),
        'single_instance_size': sum(r.size for r in unique) // divisor,
        'shared_instance_files': len(shared),
        'shared_instance_size': sum(r.size for r in shared) // divisor,
        'shared_instances': sum(len(r.paths) for r in shared),
        'errors': len(result.errors)
        }


def summary_lines(summary:dict) -> str:
    s = summary
    return textwrap.dedent(f"""
        {s['total_files']} Total files (with duplicates): {s['total_size']} {s['unit']}
        {s['distinct_files']} Total files (without duplicates): {s['distinct_size']} {s['unit']}
        {s['single_instance_files']} Single instance files: {s['single_instance_size']} {s['unit']}
        {s['shared_instance_files']} Shared instance files: {s['shared_instance_size']} {s['unit']} ({s['shared_instances']} instances)
        """).strip()


def _chosen(result:ScanResult, verbosity:str) -> Tuple[List[FileRecord], List[FileRecord]]:
    """
    Apply the verbosity. Shared groups with the most disk usage
    come first.
    """
    if verbosity not in VERBOSITIES:
        raise ValueError(f"unknown verbosity {verbosity}; choose from {VERBOSITIES}")
    if verbosity == 'quiet': return [], []

    shared = sorted(result.shared, key=disk_usage, reverse=True)
    unique = result.unique if verbosity == 'all' else []
    return shared, unique


def render_standard(result:ScanResult, blocksize:str='B', verbosity:str='duplicates') -> str:
    """
    The listing for a person to read.
    """
    divisor, unit = blocksize_of(blocksize)
    shared, unique = _chosen(result, verbosity)

    lines = []
    if shared:
        lines.append("Shared instance files and instances")
        for r in shared:
            lines.append(f"{r} instances:")
            h = '' if r.full_hash is None else format(r.full_hash, '032x')
            lines.extend(f"    {p} - {h}" for p in r.paths)
            lines.append(f"Total disk usage {disk_usage(r) // divisor} {unit}")

    if unique:
        lines.append("Single instance files")
        lines.extend(r.name for r in unique)

    return "\n".join(lines)


def render_json(result:ScanResult, blocksize:str='B', verbosity:str='duplicates') -> str:
    """
    The listing for a program to read. The summary and the errors
    are always present; the verbosity decides which records are.
    """
    shared, unique = _chosen(result, verbosity)
    document = {
        'blocksize': blocksize_of(blocksize)[1],
        'summary': summarize(result, blocksize),
        'shared': [ r.as_dict() for r in shared ],
        'unique': [ r.as_dict() for r in unique ],
        'errors': [ e.as_dict() for e in result.errors ]
        }
    return json.dumps(document, indent=4)


def render(result:ScanResult, fmt:str='standard',
    blocksize:str='B', verbosity:str='duplicates') -> str:
    if fmt == 'standard': return render_standard(result, blocksize, verbosity)
    if fmt == 'json': return render_json(result, blocksize, verbosity)
    raise ValueError(f"unknown format {fmt}; choose from {FORMATS}")


def write_output(text:str, output:str) -> Optional[str]:
    """
    Write the text to the named file, or nowhere at all if the
    name is "no".

    returns -- the name of the file written, or None.

    raises -- OSError if the file cannot be written.
    """
    if not output or output.lower() == NO_OUTPUT: return None

    with open(output, 'w', encoding='utf-8') as f:
        f.write(text)
        if text and not text.endswith("\n"): f.write("\n")

    logger.info(f"results written to {output}")
    return output
