import logging

import pytest

from py_eulercalc import Calculator, Expression, resetConfig
from py_eulercalc.logger import logger

logger.setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def default_config():
    resetConfig()
    yield
    resetConfig()


@pytest.fixture
def calc():
    return Calculator()


@pytest.fixture
def cooling():
    """Newton cooling towards 300 from the classic 350 start."""
    return Expression.compile("0.3*(300 - y)")


@pytest.fixture
def relaxing():
    """Decay towards 70, stays inside the 60..95 band used by field tests."""
    return Expression.compile("-0.05*(y - 70)")
