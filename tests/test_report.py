# -*- coding: utf-8 -*-
import json

import pytest

import report
from deuxlib import aggregate
from fileclass import FileRecord
from scanerrors import FileUnreadable


def hashed(path, size, value):
    r = FileRecord(path, size)
    r.set_partial_hash(value, size)
    return r


@pytest.fixture
def result():
    big = hashed('/d/big.iso', 3 << 20, 1)
    big.merge(hashed('/e/big.iso', 3 << 20, 1))
    small = hashed('/d/a.txt', 2048, 2)
    small.merge(hashed('/e/a.txt', 2048, 2))
    small.merge(hashed('/f/a.txt', 2048, 2))
    lonely = FileRecord('/d/lonely', 5000)
    return aggregate([lonely], [small, big], [FileUnreadable('/d/gone', OSError(2, 'No such file or directory'))])


def test_summarize(result):
    s = report.summarize(result)
    assert s['unit'] == 'Bytes'
    assert s['total_files'] == 6
    assert s['total_size'] == 2 * (3 << 20) + 3 * 2048 + 5000
    assert s['distinct_files'] == 3
    assert s['distinct_size'] == (3 << 20) + 2048 + 5000
    assert s['single_instance_files'] == 1
    assert s['shared_instance_files'] == 2
    assert s['shared_instances'] == 5
    assert s['errors'] == 1


def test_summarize_in_kilobytes(result):
    s = report.summarize(result, 'k')
    assert s['unit'] == 'Kilobytes'
    assert s['single_instance_size'] == 4
    assert s['shared_instance_size'] == 3 * 1024 + 2


def test_unknown_blocksize(result):
    with pytest.raises(ValueError):
        report.summarize(result, 'T')


def test_summary_lines(result):
    lines = report.summary_lines(report.summarize(result, 'MB')).splitlines()
    assert lines[0] == "6 Total files (with duplicates): 6 Megabytes"
    assert lines[3] == "2 Shared instance files: 3 Megabytes (5 instances)"


def test_standard_duplicates(result):
    text = report.render_standard(result)
    assert text.startswith("Shared instance files and instances\nbig.iso instances:")
    assert "/f/a.txt - " in text
    assert "lonely" not in text
    assert f"Total disk usage {2 * (3 << 20)} Bytes" in text


def test_standard_all(result):
    text = report.render_standard(result, 'K', 'all')
    assert text.endswith("Single instance files\n/d/lonely")
    assert "Total disk usage 6144 Kilobytes" in text


def test_quiet(result):
    assert report.render_standard(result, verbosity='quiet') == ''
    document = json.loads(report.render_json(result, verbosity='quiet'))
    assert document['shared'] == [] and document['unique'] == []
    assert document['summary']['total_files'] == 6


def test_json(result):
    document = json.loads(report.render(result, 'json', 'B', 'all'))
    assert document['blocksize'] == 'Bytes'
    assert document['shared'][0]['file_paths'] == ['/d/big.iso', '/e/big.iso']
    assert document['shared'][0]['file_length'] == 3 << 20
    assert document['unique'][0]['full_hash'] is None
    assert document['errors'] == [{'kind': 'FileUnreadable', 'path': '/d/gone',
        'cause': '[Errno 2] No such file or directory'}]


def test_bad_choices(result):
    with pytest.raises(ValueError):
        report.render(result, 'xml')
    with pytest.raises(ValueError):
        report.render(result, verbosity='chatty')


def test_write_output(tmp_path):
    target = tmp_path / 'out.txt'
    assert report.write_output("hello", str(target)) == str(target)
    assert target.read_text() == "hello\n"


def test_no_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert report.write_output("hello", 'no') is None
    assert report.write_output("hello", 'NO') is None
    assert list(tmp_path.iterdir()) == []
