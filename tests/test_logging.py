"""Tests for logging utilities."""

import logging
from io import StringIO

from f2q.fermion import BravyiKitaev, FermionOperator, MappingConfig, MappingEngine
from f2q.logging import configure_logging, get_logger, set_log_level


def test_get_logger_prefixes_and_caches():
    """Test loggers live under the f2q namespace and are reused."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "f2q.test_module"
    assert get_logger("test_module") is logger
    assert get_logger("other_module") is not logger


def test_get_logger_keeps_package_prefix():
    """Test that module names inside the package are not prefixed twice."""
    assert get_logger("f2q.fermion.engine").name == "f2q.fermion.engine"
    assert get_logger().name == "f2q"


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to the root logger."""
    assert get_logger("test_module").propagate is False


def test_set_log_level_int_and_string():
    """Test set_log_level accepts logging constants and level names."""
    logger = get_logger("test_module")
    try:
        set_log_level(logging.INFO)
        assert logger.level == logging.INFO
        set_log_level("debug")
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_stream_and_format():
    """Test configure_logging redirects output and applies the format."""
    stream = StringIO()
    logger = get_logger("test_module")
    configure_logging(level=logging.DEBUG, format_string="%(name)s|%(message)s", stream=stream)
    try:
        logger.debug("Debug message")
    finally:
        configure_logging(level=logging.WARNING)
    assert stream.getvalue() == "f2q.test_module|Debug message\n"


def test_new_loggers_use_configured_stream():
    """Test a logger created after configure_logging writes to its stream."""
    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream)
    try:
        get_logger("created_late").info("late message")
    finally:
        configure_logging(level=logging.WARNING)
    assert "[INFO] f2q.created_late: late message" in stream.getvalue()


def test_warning_default_hides_info():
    """Test nothing below WARNING is written by default."""
    stream = StringIO()
    configure_logging(stream=stream)
    try:
        get_logger("test_module").info("hidden")
    finally:
        configure_logging(level=logging.WARNING)
    assert stream.getvalue() == ""


def test_engine_logs_mapping_run():
    """Test that the mapping engine reports start and finish at INFO."""
    stream = StringIO()
    engine = MappingEngine(MappingConfig(n_qubits=2))
    configure_logging(level=logging.INFO, stream=stream)
    try:
        engine.map_terms([FermionOperator.one_body(0, 1, 1.0)])
    finally:
        configure_logging(level=logging.WARNING)

    output = stream.getvalue()
    assert "Mapping sequence Hamiltonian with jordan-wigner on 2 qubits" in output
    assert "Mapped to 4 Pauli terms" in output


def test_bravyi_kitaev_logs_table_build():
    """Test Bravyi-Kitaev initialization is reported at DEBUG."""
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    try:
        BravyiKitaev(8).initialize()
    finally:
        configure_logging(level=logging.WARNING)
    assert "Built Bravyi-Kitaev tables for 8 qubits" in stream.getvalue()
