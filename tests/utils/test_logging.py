import re

from geocoord.utils.logging import LOGGER, warn_once


def test_warn_once(caplog):
    warn_once('test warn_once')
    assert 'test warn_once' in caplog.text

    warn_once('test warn_once')
    assert len(re.findall('test warn_once', caplog.text)) == 1

    warn_once('another test warn_once')
    assert 'another test warn_once' in caplog.text


def test_logger():
    assert LOGGER.name == 'geocoord'
    assert LOGGER.handlers
