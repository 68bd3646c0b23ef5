import logging

import pytest

from utils.logger import get_logger, resolve_level


@pytest.mark.parametrize(
    "name, expected",
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
        ("verbose", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected


def test_get_logger_returns_named_logger():
    assert get_logger("db.connection").name == "db.connection"
