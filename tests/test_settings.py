import logging

import pytest

import calc
from settings import LOG_LEVEL_ENV, load_settings, parse_log_level


def test_default_settings():
    settings = load_settings({})
    assert settings.log_level == logging.INFO
    assert settings.defaults.params_billions == 65
    assert settings.defaults.memory_mode == calc.DISCRETE_GPU
    assert settings.bounds.context_max == 32768


def test_defaults_are_valid_options():
    defaults = load_settings({}).defaults
    assert defaults.model_quant in calc.MODEL_QUANTIZATIONS
    assert defaults.kv_cache_quant in calc.KV_CACHE_QUANTIZATIONS
    assert defaults.memory_mode in calc.MEMORY_MODES


def test_log_level_from_environment():
    assert load_settings({LOG_LEVEL_ENV: "debug"}).log_level == logging.DEBUG
    assert parse_log_level(" Warning ") == logging.WARNING


def test_invalid_log_level():
    with pytest.raises(ValueError):
        load_settings({LOG_LEVEL_ENV: "chatty"})
