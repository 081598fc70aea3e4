# -*- coding: utf-8 -*-
import json
import os

import pytest

import deuxdir


@pytest.fixture
def workspace(make_tree, tmp_path, monkeypatch):
    """
    A directory to scan, and a separate directory to run in, so
    the log and the results never land in the scanned tree.
    """
    scanned = tmp_path / 'scanned'
    names = make_tree({'a': 'XXXX', 'b': 'XXXX', 'c': 'YYYY', 'sub/d': 'ZZZZZZ'}, top=scanned)
    here = tmp_path / 'here'
    here.mkdir()
    monkeypatch.chdir(here)
    return names, scanned, here


def test_args_defaults(workspace):
    names, scanned, here = workspace
    myargs = deuxdir.deuxdir_args([], str(here))
    assert myargs.roots == [str(here)]
    assert myargs.minimum == 0
    assert myargs.blocksize == 'B'
    assert myargs.verbosity == 'duplicates'
    assert myargs.output == 'Results.txt'


def test_args_directories_combine(workspace):
    names, scanned, here = workspace
    myargs = deuxdir.deuxdir_args(['one', '-d', 'two', 'three', '-b', 'kb', '-i', '.git'], str(here))
    assert myargs.roots == ['one', 'two', 'three']
    assert myargs.blocksize == 'KB'
    assert myargs.ignore == ['.git']


def test_args_from_config(workspace):
    names, scanned, here = workspace
    (here / 'deuxdir.toml').write_text(
        '[deuxdir]\nminimum = 5\nblocksize = "m"\nignore = ".cache"\ncolor = true\n')
    myargs = deuxdir.deuxdir_args(['-m', '7'], str(here))
    assert myargs.minimum == 7
    assert myargs.blocksize == 'M'
    assert myargs.ignore == ['.cache']
    assert myargs.unknown_config == ['color']


def test_bad_config(workspace, capsys):
    names, scanned, here = workspace
    (here / 'deuxdir.toml').write_text('[deuxdir\n')
    assert deuxdir.main([str(scanned)]) == os.EX_CONFIG
    assert 'Unusable configuration' in capsys.readouterr().err


@pytest.mark.parametrize('setting', [
    'workers = 0',
    'minimum = -5',
    'partial_bytes = 0',
    'minimum = true',
    'verbosity = "chatty"',
    'format = "xml"',
    'blocksize = "TB"',
    'log_level = 15',
    'verify = "yes"',
    'ignore = [".git", 3]',
    ])
def test_bad_config_value(workspace, capsys, setting):
    names, scanned, here = workspace
    (here / 'deuxdir.toml').write_text(f'[deuxdir]\n{setting}\n')
    with pytest.raises(deuxdir.ConfigError):
        deuxdir.load_config(str(here / 'deuxdir.toml'))
    assert deuxdir.main([str(scanned), '-o', 'no']) == os.EX_CONFIG
    assert 'Unusable configuration' in capsys.readouterr().err


def test_good_config_values(workspace):
    names, scanned, here = workspace
    (here / 'deuxdir.toml').write_text('[deuxdir]\nworkers = 2\npartial_bytes = 4096\n'
        'verify = true\nformat = "json"\nverbosity = "all"\nlog_level = 10\n')
    myargs = deuxdir.deuxdir_args([], str(here))
    assert (myargs.workers, myargs.partial_bytes, myargs.verify) == (2, 4096, True)
    assert (myargs.format, myargs.verbosity, myargs.log_level) == ('json', 'all', 10)


def test_command_line_ignore_replaces_config(workspace):
    names, scanned, here = workspace
    (here / 'deuxdir.toml').write_text('[deuxdir]\nignore = [".cache"]\n')
    assert deuxdir.deuxdir_args([], str(here)).ignore == ['.cache']
    assert deuxdir.deuxdir_args(['-i', '.git'], str(here)).ignore == ['.git']
    assert deuxdir.deuxdir_args(['-i', '.git', '-i', 'tmp'], str(here)).ignore == ['.git', 'tmp']


def test_results_file(workspace, capsys):
    names, scanned, here = workspace
    assert deuxdir.main([str(scanned)]) == os.EX_OK
    out = capsys.readouterr().out
    assert "4 Total files (with duplicates): 18 Bytes" in out
    assert "1 Shared instance files: 4 Bytes (2 instances)" in out

    listing = (here / 'Results.txt').read_text()
    assert names['a'] in listing and names['b'] in listing
    assert names['c'] not in listing
    assert (here / 'deuxdir.log').exists()


def test_listing_to_stdout(workspace, capsys):
    names, scanned, here = workspace
    assert deuxdir.main([str(scanned), '-o', 'no', '-v', 'all']) == os.EX_OK
    out = capsys.readouterr().out
    assert "Single instance files" in out
    assert names['sub/d'] in out
    assert not (here / 'Results.txt').exists()


def test_json_to_stdout(workspace, capsys):
    names, scanned, here = workspace
    assert deuxdir.main(['-d', str(scanned), '-f', 'json', '-o', 'no', '-m', '5']) == os.EX_OK
    document = json.loads(capsys.readouterr().out)
    assert document['shared'] == []
    assert document['summary']['total_files'] == 1


def test_json_to_file(workspace, capsys):
    names, scanned, here = workspace
    missing = str(scanned / 'nope')
    assert deuxdir.main([str(scanned), missing, '-f', 'json', '-o', 'found.json']) == os.EX_OK
    captured = capsys.readouterr()
    assert "4 Total files (with duplicates): 18 Bytes" in captured.out
    assert f"RootUnavailable: {missing}" in captured.err

    document = json.loads((here / 'found.json').read_text())
    assert document['summary']['total_files'] == 4
    assert [ sorted(g['file_paths']) for g in document['shared'] ] == [sorted([names['a'], names['b']])]
    assert len(document['errors']) == 1


def test_json_to_stdout_errors_to_stderr(workspace, capsys):
    names, scanned, here = workspace
    missing = str(scanned / 'nope')
    assert deuxdir.main([str(scanned), missing, '-f', 'json', '-o', 'no']) == os.EX_OK
    captured = capsys.readouterr()
    assert json.loads(captured.out)['summary']['total_files'] == 4
    assert f"RootUnavailable: {missing}" in captured.err


def test_missing_directory_is_reported(workspace, capsys):
    names, scanned, here = workspace
    missing = str(scanned / 'nope')
    assert deuxdir.main([str(scanned), missing, '-o', 'no']) == os.EX_OK
    err = capsys.readouterr().err
    assert f"RootUnavailable: {missing}" in err


def test_unwritable_output(workspace):
    names, scanned, here = workspace
    assert deuxdir.main([str(scanned), '-o', str(here / 'no-such-dir' / 'out.txt')]) == os.EX_CANTCREAT


def test_explain(workspace, capsys):
    assert deuxdir.main(['--explain']) == os.EX_OK
    assert 'THE OPTIONS' in capsys.readouterr().out


def test_zap(workspace):
    names, scanned, here = workspace
    (here / 'deuxdir.log').write_text('old news\n')
    deuxdir.main([str(scanned), '-z', '-o', 'no'])
    assert 'old news' not in (here / 'deuxdir.log').read_text()


def test_module_doc():
    assert 'same content' in deuxdir.__doc__
