#!/usr/bin/env python3
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

import os
import textwrap


def deuxdir_help() -> int:
    """
    `deuxdir` finds the files that have the same content, no matter
    what they are named or where they live, in one or more directory
    trees. It only reads; it never moves, renames, or removes anything.

    If you run the program with no arguments, it looks through the
    current directory and writes the groups of duplicates to a file
    named Results.txt.

    deuxdir works in stages, and each stage only looks at what the
    stage before it could not settle:

    - Files are grouped by their size. Files that differ in size are
        obviously not the same file, and a file whose size no other
        file shares is unique without our ever opening it.
    - The files that share a size have the first few blocks hashed.
        If that partial hash differs, the files differ.
    - Only the files that agree on the partial hash are read all the
        way through. Matching full hashes means matching content.
    - With --verify, even a matching full hash is not enough, and the
        files are compared byte for byte.

    Problems with individual files or directories (permissions, files
    that disappear while we look at them) are reported, and the rest
    of the scan carries on.

    THE OPTIONS:
    ==================================================================

    -? / --explain :: This is it; you are here. There is no more.

    {dir} [{dir} ..] / -d {dir} [{dir} ..]
        The directories to look through. Environment variables and ~
        are expanded. The default is the current directory. Nested
        directories may both be named; no file is counted twice.

    -i / --ignore {name-or-dir} [ -i .. ]
        Do not go into these directories. A bare name such as `.git`
        is skipped wherever it turns up; a path such as `~/mail/spool`
        means just that one directory. Names given here replace the
        ignore list in deuxdir.toml.

    -m / --minimum {int}
        Files smaller than this many bytes are not considered at all.
        The default is 0, which means every file counts.

    -b / --blocksize {B | K | M | G}
        Report sizes in bytes (the default), kilobytes, megabytes, or
        gigabytes.

    -v / --verbosity {quiet | duplicates | all}
        quiet shows only the totals; duplicates (the default) lists the
        groups of duplicates; all lists the unique files as well.

    -f / --format {standard | json}
        standard is for people. json is for programs. With `-o no`,
        the json document is the only thing printed, so it can be piped.

    -o / --output {filename | no}
        Where to write the listing. The default is Results.txt. If you
        say `no`, the listing is printed instead of written.

    -w / --workers {int}
        How many threads read files at once.

    --partial-bytes {int}
        How much of the beginning of each file goes into the partial
        hash. The default is 16384.

    --verify
        Compare files byte for byte after their full hashes match.

    --config {filename}
        A TOML file with a [deuxdir] table. The default is deuxdir.toml
        in the current directory. Anything on the command line wins.

    --log-level {int}
        The usual logging levels; the default is 20 (INFO). The log is
        deuxdir.log in the current directory.

    -z / --zap
        Remove the old log file first.
    """

    print(textwrap.dedent(deuxdir_help.__doc__))
    return os.EX_OK
