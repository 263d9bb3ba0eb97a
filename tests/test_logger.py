import importlib
import logging

from py_eulercalc import Calculator, disable_file_logging, enable_file_logging
from py_eulercalc.logger import logger

logger_module = importlib.import_module("py_eulercalc.logger")


class TestFileLogging:

    def test_enable_disable(self, tmp_path):
        path = tmp_path / "euler.log"
        enable_file_logging(str(path))
        try:
            assert logger_module.file_handler in logger.handlers
            Calculator().table("x", 0.5, 0, 0, 1, 2)
        finally:
            disable_file_logging()
        assert logger_module.file_handler is None
        text = path.read_text()
        assert "DEBUG:Euler ran 3 steps" in text

    def test_replace_handler(self, tmp_path):
        enable_file_logging(str(tmp_path / "first.log"))
        first = logger_module.file_handler
        enable_file_logging(str(tmp_path / "second.log"))
        try:
            assert first not in logger.handlers
            assert logger_module.file_handler is not first
        finally:
            disable_file_logging()

    def test_disable_twice(self):
        disable_file_logging()
        disable_file_logging()
        assert all(not isinstance(h, logging.FileHandler) for h in logger.handlers)
