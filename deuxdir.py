# -*- coding: utf-8 -*-
"""
deuxdir finds the files under one or more directories that have
the same content. This module is the program: it reads the command
line and the deuxdir.toml file, sets up the log, runs the scan, and
writes what it found to the screen and to the results file.
"""
import typing
from   typing import *


# Credits
__author__ =        'George Flanagin'
__copyright__ =     'Copyright 2025 George Flanagin'
__credits__ =       'None. This idea has been around forever.'
__version__ =       '2.0'
__maintainer__ =    'George Flanagin'
__email__ =         'me+undeux@georgeflanagin.com'
__status__ =        'continual development.'
__license__ =       'MIT'

import os
import sys

min_py = (3, 11)

if sys.version_info < min_py:
    print(f"This program requires at least Python {min_py[0]}.{min_py[1]}")
    sys.exit(os.EX_SOFTWARE)

import argparse
import contextlib
from   logging import CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET
import tomllib

#####################################
# This project
#####################################

import deuxlib
from   deuxdecorators import trap
from   deuxlogger import DeuxLogger
from   help import deuxdir_help
import report
from   scanerrors import NoRootsGiven

logger = DeuxLogger()

LOG_LEVELS = (CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET)


def at_least(n:int) -> Callable:
    # bool is an int, but true is not a number of anything.
    return lambda v : type(v) is int and v >= n


###
# What a value in the [deuxdir] table must look like. The values
# are not parsed like the command line, so they are checked here.
###
CONFIG_CHECKS = {
    'ignore' : lambda v : isinstance(v, list) and all(isinstance(x, str) for x in v),
    'minimum' : at_least(0),
    'blocksize' : lambda v : isinstance(v, str) and v.upper() in report.BLOCKSIZES,
    'verbosity' : lambda v : isinstance(v, str) and v in report.VERBOSITIES,
    'format' : lambda v : isinstance(v, str) and v in report.FORMATS,
    'output' : lambda v : isinstance(v, str),
    'workers' : at_least(1),
    'partial_bytes' : at_least(1),
    'verify' : lambda v : isinstance(v, bool),
    'log_level' : lambda v : type(v) is int and v in LOG_LEVELS
    }

CONFIG_KEYS = set(CONFIG_CHECKS)


class ConfigError(Exception): pass


def load_config(filename:str) -> Tuple[dict, list]:
    """
    Read the [deuxdir] table of a TOML file. A missing file is
    not an error; it just means there is no configuration.

    returns -- (the known settings, the names of unknown settings)

    raises -- ConfigError if the file is there but unusable.
    """
    try:
        with open(filename, 'rb') as f:
            config = tomllib.load(f)
    except FileNotFoundError as e:
        return {}, []
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"{filename}: {e}") from e

    table = config.get('deuxdir', {})
    if not isinstance(table, dict):
        raise ConfigError(f"{filename}: [deuxdir] must be a table")

    known = {k:v for k, v in table.items() if k in CONFIG_KEYS}
    if isinstance(known.get('ignore'), str): known['ignore'] = [known['ignore']]
    for k, v in known.items():
        if not CONFIG_CHECKS[k](v):
            raise ConfigError(f"{filename}: {k} cannot be {v!r}")
    if 'blocksize' in known: known['blocksize'] = known['blocksize'].upper()

    return known, sorted(set(table) - CONFIG_KEYS)


def positive_int(s:str) -> int:
    i = int(s)
    if i < 1: raise argparse.ArgumentTypeError(f"{s} must be at least 1")
    return i


def nonnegative_int(s:str) -> int:
    i = int(s)
    if i < 0: raise argparse.ArgumentTypeError(f"{s} cannot be negative")
    return i


def deuxdir_args(argv:list=None, here:str=None) -> argparse.Namespace:
    """
    Parse the command line, with the config file supplying the
    defaults for anything that is not on it.
    """
    here = os.getcwd() if here is None else here

    early = argparse.ArgumentParser(add_help=False)
    early.add_argument('--config', type=str, default=f"{here}/deuxdir.toml")
    early_args, _ = early.parse_known_args(argv)

    parser = argparse.ArgumentParser(prog='deuxdir', parents=[early],
        description='deuxdir: Find files with the same content.')

    parser.add_argument('-?', '--explain', action='store_true')

    parser.add_argument('dirs', nargs="*", default=[],
        help="directories to investigate (if not *this* directory)")

    parser.add_argument('-d', '--directories', action='extend', nargs='+',
        default=[], help="more directories to investigate.")

    parser.add_argument('-i', '--ignore', action='append', default=None,
        help="directory names or paths to skip. May be repeated, and replaces the config's list.")

    parser.add_argument('-m', '--minimum', type=nonnegative_int, default=0,
        help="files smaller than this many bytes are ignored. Default is 0.")

    parser.add_argument('-b', '--blocksize', type=str.upper, default='B',
        choices=tuple(report.BLOCKSIZES),
        help="display sizes in bytes, kilobytes, megabytes or gigabytes.")

    parser.add_argument('-v', '--verbosity', default='duplicates',
        choices=report.VERBOSITIES,
        help="what to list. Default is duplicates.")

    parser.add_argument('-f', '--format', default='standard',
        choices=report.FORMATS,
        help="standard or json. Default is standard.")

    parser.add_argument('-o', '--output', type=str, default='Results.txt',
        help=f"file to receive the listing, or '{report.NO_OUTPUT}' for none.")

    parser.add_argument('-w', '--workers', type=positive_int, default=None,
        help="number of threads reading files.")

    parser.add_argument('--partial-bytes', type=positive_int, default=deuxlib.PARTIAL_BYTES,
        help=f"leading bytes in the partial hash. Default is {deuxlib.PARTIAL_BYTES}")

    parser.add_argument('--verify', action='store_true',
        help="compare byte for byte after a full hash match.")

    parser.add_argument('--log-level', type=int, default=INFO,
        choices=LOG_LEVELS,
        help=f"Logging level, defaults to {INFO}")

    parser.add_argument('--version', action='store_true',
        help='Print the version and exit.')

    parser.add_argument('-z', '--zap', action='store_true',
        help="remove old logfile[s]")

    config, unknown = load_config(early_args.config)
    # -i on the command line replaces the config's list.
    config_ignore = config.pop('ignore', [])
    parser.set_defaults(**config)

    myargs = parser.parse_args(argv)
    myargs.unknown_config = unknown
    myargs.roots = myargs.dirs + myargs.directories or [here]
    if myargs.ignore is None: myargs.ignore = config_ignore
    return myargs


@trap
def deuxdir_main(myargs:argparse.Namespace) -> int:
    """
    Scan, report, and write.
    """
    try:
        result = deuxlib.find_duplicates(myargs.roots, myargs.ignore, myargs.minimum,
            workers=myargs.workers, partial_bytes=myargs.partial_bytes,
            verify=myargs.verify)
    except NoRootsGiven as e:
        print(e, file=sys.stderr)
        return os.EX_USAGE

    listing = report.render(result, myargs.format, myargs.blocksize, myargs.verbosity)
    to_file = myargs.output and myargs.output.lower() != report.NO_OUTPUT

    # When the JSON document goes to stdout, it is all that goes there.
    if to_file or myargs.format != 'json':
        print(report.summary_lines(report.summarize(result, myargs.blocksize)))
    for e in result.errors:
        print(e, file=sys.stderr)

    if not to_file:
        if listing: print(listing)
        return os.EX_OK

    try:
        report.write_output(listing, myargs.output)
    except OSError as e:
        logger.error(f"cannot write {myargs.output}: {e}")
        print(f"cannot write {myargs.output}: {e}", file=sys.stderr)
        return os.EX_CANTCREAT

    return os.EX_OK


def main(argv:list=None) -> int:

    here       = os.getcwd()
    progname   = 'deuxdir'
    logfile    = f"{here}/{progname}.log"

    try:
        myargs = deuxdir_args(argv, here)
    except ConfigError as e:
        print(f"Unusable configuration: {e}", file=sys.stderr)
        return os.EX_CONFIG

    if myargs.explain: return deuxdir_help()
    if myargs.version:
        print(f"deuxdir {__version__}")
        return os.EX_OK

    if myargs.zap:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(logfile)

    global logger
    logger = DeuxLogger(logfile=logfile, level=myargs.log_level)
    for k in myargs.unknown_config:
        logger.warning(f"ignoring unknown setting {k} in {myargs.config}")
    logger.info(f"{progname} {__version__} invoked with {vars(myargs)}")

    try:
        return globals()[f"{progname}_main"](myargs)

    except Exception as e:
        print(f"Escaped or re-raised exception: {e}", file=sys.stderr)
        return os.EX_SOFTWARE


if __name__ == "__main__":
    sys.exit(main())
