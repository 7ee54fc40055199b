import logging

import pytest

from atto import config
from atto.errors import DepthExceeded, EvalDepthExceeded, StepBudgetExceeded
from atto.interpreter import Interpreter
from atto.reader.parser import parse


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("ATTO_MAX_DEPTH", "ATTO_MAX_EVAL_DEPTH", "ATTO_STEP_BUDGET", "ATTO_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    assert config.get_max_depth() == config.DEFAULT_MAX_DEPTH
    assert config.get_max_eval_depth() == config.DEFAULT_MAX_EVAL_DEPTH
    assert config.get_step_budget() is None
    assert config.get_log_level() == logging.WARNING


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("ATTO_MAX_DEPTH", " 12 ")
    monkeypatch.setenv("ATTO_STEP_BUDGET", "500")
    monkeypatch.setenv("ATTO_LOG_LEVEL", "debug")
    assert config.get_max_depth() == 12
    assert config.get_step_budget() == 500
    assert config.get_log_level() == logging.DEBUG


def test_blank_value_means_default(monkeypatch):
    monkeypatch.setenv("ATTO_MAX_DEPTH", "")
    assert config.get_max_depth() == config.DEFAULT_MAX_DEPTH


@pytest.mark.parametrize("raw", ["many", "1.5", "0", "-3"])
def test_invalid_integers(monkeypatch, raw):
    monkeypatch.setenv("ATTO_MAX_DEPTH", raw)
    with pytest.raises(ValueError, match="ATTO_MAX_DEPTH"):
        config.get_max_depth()


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("ATTO_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="ATTO_LOG_LEVEL"):
        config.get_log_level()


def test_parser_reads_depth_from_environment(monkeypatch):
    monkeypatch.setenv("ATTO_MAX_DEPTH", "2")
    assert parse("((a))")
    with pytest.raises(DepthExceeded):
        parse("(((a)))")


def test_evaluator_reads_limits_from_environment(monkeypatch):
    monkeypatch.setenv("ATTO_STEP_BUDGET", "1")
    with pytest.raises(StepBudgetExceeded):
        Interpreter().eval("+ 1 (+ 1 1)")
    monkeypatch.delenv("ATTO_STEP_BUDGET")
    monkeypatch.setenv("ATTO_MAX_EVAL_DEPTH", "3")
    with pytest.raises(EvalDepthExceeded):
        Interpreter().eval("+ 1 (+ 1 (+ 1 (+ 1 1)))")


def test_configure_logging(monkeypatch):
    monkeypatch.setenv("ATTO_LOG_LEVEL", "DEBUG")
    logger = logging.getLogger("atto")
    saved_handlers, saved_level = logger.handlers[:], logger.level
    try:
        config.configure_logging()
        config.configure_logging()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        logger.handlers[:] = saved_handlers
        logger.setLevel(saved_level)
