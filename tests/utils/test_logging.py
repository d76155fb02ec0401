import re

from geocoords.utils import logging as logging_module
from geocoords.utils.logging import LOGGER, warn_once


def test_logger():
    assert LOGGER.name == 'geocoords'


def test_warn_once(caplog):
    warn_once('test')
    assert 'test' in caplog.text

    warn_once('test')
    assert len(re.findall('test', caplog.text)) == 1


def test_warn_once_args(caplog, monkeypatch):
    monkeypatch.setattr(logging_module, '_WARNINGS', set())

    warn_once('value was %d', 1)
    warn_once('value was %d', 2)

    assert 'value was 1' in caplog.text
    assert 'value was 2' not in caplog.text
