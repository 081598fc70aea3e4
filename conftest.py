# -*- coding: utf-8 -*-
import logging
import os

import pytest

import deuxlogger


def build_tree(top, files:dict) -> dict:
    """
    Write files (relative name -> bytes or str) under top.

    returns -- relative name -> absolute name.
    """
    names = {}
    for rel, content in files.items():
        p = top / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str): content = content.encode()
        p.write_bytes(content)
        names[rel] = str(p)
    return names


@pytest.fixture
def make_tree(tmp_path):
    def _make(files:dict, top=None) -> dict:
        return build_tree(top if top is not None else tmp_path, files)
    return _make


@pytest.fixture(autouse=True)
def quiet_logger():
    """
    The program attaches handlers to the shared logger; take them
    off again so that one test cannot write into another's streams.
    """
    yield
    logger = logging.getLogger(deuxlogger.LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def tmp_path(tmp_path):
    """
    The walker reports resolved names, so the tests must build
    their expectations from resolved names as well.
    """
    return tmp_path.resolve()
