import logging
import os
from dataclasses import dataclass, field

LOG_LEVEL_ENV = "LLM_CALC_LOG_LEVEL"


@dataclass(frozen=True)
class Bounds:
    """Slider limits for the sidebar. The engine itself does not check them."""
    params_min: int = 1
    params_max: int = 1000
    context_min: int = 128
    context_max: int = 32768
    context_step: int = 128
    system_memory_min: int = 8
    system_memory_max: int = 512
    system_memory_step: int = 8


@dataclass(frozen=True)
class Defaults:
    params_billions: int = 65
    model_quant: str = "Q4"
    context_length: int = 4096
    use_kv_cache: bool = True
    kv_cache_quant: str = "F16"
    memory_mode: str = "DISCRETE_GPU"
    system_memory_gb: int = 128


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.INFO
    bounds: Bounds = field(default_factory=Bounds)
    defaults: Defaults = field(default_factory=Defaults)


def parse_log_level(name):
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV} must be a logging level name, got {name!r}.")
    return level


def load_settings(environ=None):
    """Build settings from the environment (os.environ unless given)."""
    env = os.environ if environ is None else environ
    return Settings(log_level=parse_log_level(env.get(LOG_LEVEL_ENV, "INFO")))
