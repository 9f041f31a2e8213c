"""Tests for the configuration dataclass and the logging setup."""
import logging

import pytest

from qgate import (
    DEFAULT_CONFIG, QgateConfig, SingleQubitGate, Toffoli, UnitaryMatrixError,
    get_config, get_logger, set_config, setup_logging,
)
from qgate.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def restore_config():
    previous = get_config()
    yield
    set_config(previous)


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


def test_defaults():
    config = QgateConfig()
    assert config.unitary_tolerance == 1e-10
    assert config.log_level == "WARNING"
    assert config.parse_cache_size == 1024
    assert get_config() == DEFAULT_CONFIG


def test_validation():
    assert QgateConfig(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValueError, match="unitary_tolerance"):
        QgateConfig(unitary_tolerance=-1.0)
    with pytest.raises(ValueError, match="parse_cache_size"):
        QgateConfig(parse_cache_size=-1)


def test_from_env(monkeypatch):
    monkeypatch.setenv("QGATE_UNITARY_TOLERANCE", "1e-6")
    monkeypatch.setenv("QGATE_LOG_LEVEL", "info")
    config = QgateConfig.from_env()
    assert config.unitary_tolerance == 1e-6
    assert config.log_level == "INFO"


def test_from_env_keeps_base_values(monkeypatch):
    monkeypatch.delenv("QGATE_UNITARY_TOLERANCE", raising=False)
    monkeypatch.delenv("QGATE_LOG_LEVEL", raising=False)
    base = QgateConfig(unitary_tolerance=1e-3, parse_cache_size=8)
    assert QgateConfig.from_env(base) == base


def test_set_config_changes_tolerance(restore_config):
    gate = SingleQubitGate(0, 1.0 + 1e-6, 0.0, 0.0, 0.0, 0.0)
    with pytest.raises(UnitaryMatrixError):
        gate.unitary_matrix()
    previous = set_config(QgateConfig(unitary_tolerance=1e-5))
    assert previous == DEFAULT_CONFIG
    assert gate.unitary_matrix().shape == (2, 2)


def test_set_config_type():
    with pytest.raises(TypeError):
        set_config({"unitary_tolerance": 1e-5})


def test_get_logger_namespace():
    assert get_logger("circuit").name == "qgate.circuit"
    assert get_logger("qgate.decomposition").name == "qgate.decomposition"
    assert get_logger("qgate").name == "qgate"


def test_setup_logging_console(clean_logger):
    logger = setup_logging("debug")
    assert logger is clean_logger
    assert logger.level == logging.DEBUG
    streams = [
        handler for handler in logger.handlers
        if type(handler) is logging.StreamHandler
    ]
    assert len(streams) == 1
    # A second call replaces the handlers instead of stacking them
    setup_logging(logging.INFO)
    streams = [
        handler for handler in logger.handlers
        if type(handler) is logging.StreamHandler
    ]
    assert len(streams) == 1
    assert logger.level == logging.INFO


def test_setup_logging_file(clean_logger, tmp_path):
    log_file = tmp_path / "logs" / "qgate.log"
    logger = setup_logging("INFO", log_file=log_file, format_string="%(message)s")
    get_logger("test").info("written to file")
    for handler in logger.handlers:
        handler.flush()
    assert log_file.read_text().strip() == "written to file"


def test_setup_logging_unknown_level(clean_logger):
    with pytest.raises(ValueError, match="Unknown logging level: LOUD"):
        setup_logging("LOUD")


def test_decomposition_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger=ROOT_LOGGER_NAME):
        Toffoli(0, 1, 2).circuit()
    assert "Decomposed Toffoli(control_0=0, control_1=1, target=2) into 15 operations" in (
        caplog.text
    )


def test_rejected_parameters_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger=ROOT_LOGGER_NAME):
        with pytest.raises(UnitaryMatrixError):
            SingleQubitGate(0, 0.0, 0.0, 0.0, 0.0, 0.0).unitary_matrix()
    assert "non-unitary" in caplog.text
