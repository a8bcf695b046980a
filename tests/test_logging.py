"""Tests for logging utilities."""

import logging
from io import StringIO

from svsim import SimulatorSession
from svsim.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_namespaced_logger():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "svsim.test_module"
    assert get_logger("svsim.session").name == "svsim.session"
    assert get_logger().name == "svsim"


def test_get_logger_caching():
    assert get_logger("test_module") is get_logger("test_module")


def test_get_logger_does_not_propagate():
    assert not get_logger("test_module").propagate


def test_logger_output_format():
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        get_logger("test_module").info("Test message")
        assert captured.getvalue() == "[INFO] svsim.test_module: Test message\n"
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level_string():
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
    finally:
        set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_session_logs_lifecycle_and_gates():
    """INFO on initialize/reset, DEBUG per gate and measurement."""
    captured = StringIO()
    get_logger("svsim.session")
    try:
        configure_logging(level=logging.DEBUG, stream=captured)
        session = SimulatorSession(seed=0)
        session.initialize(2)
        session.apply_gate("H", 0)
        session.measure(0)
        session.reset()
    finally:
        configure_logging(level=logging.WARNING)

    output = captured.getvalue()
    assert "[INFO] svsim.session: initialized 2 qubits" in output
    assert "[DEBUG] svsim.session: applied H[0]" in output
    assert "[DEBUG] svsim.session: measured qubit 0" in output
    assert "[INFO] svsim.session: reset 2-qubit register" in output


def test_session_quiet_at_default_level(capsys):
    session = SimulatorSession(seed=0)
    session.initialize(1)
    session.apply_gate("X", 0)
    assert capsys.readouterr().err == ""
