import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

logger = logging.getLogger(__name__)

# Memory modes
DISCRETE_GPU = "DISCRETE_GPU"
UNIFIED_MEMORY = "UNIFIED_MEMORY"
MEMORY_MODES = [DISCRETE_GPU, UNIFIED_MEMORY]

MODEL_QUANTIZATIONS = ["F32", "F16", "Q8", "Q6", "Q5", "Q4", "Q3", "Q2", "GPTQ", "AWQ"]
KV_CACHE_QUANTIZATIONS = ["F32", "F16", "Q8", "Q5", "Q4"]

# Memory multiplier relative to 8 bits per parameter (Q8 = 1.0)
MODEL_QUANT_FACTORS = {
    "F32": 4.0,
    "F16": 2.0,
    "Q8": 1.0,
    "Q6": 0.75,
    "Q5": 0.625,
    "Q4": 0.5,
    "Q3": 0.375,
    "Q2": 0.25,
    "GPTQ": 0.4,
    "AWQ": 0.35,
}

KV_CACHE_QUANT_FACTORS = {
    "F32": 4.0,
    "F16": 2.0,
    "Q8": 1.0,
    "Q5": 0.625,
    "Q4": 0.5,
}

# Bits per parameter of the stored weight file
BITS_PER_PARAM = {
    "F32": 32,
    "F16": 16,
    "Q8": 8,
    "Q6": 6,
    "Q5": 5,
    "Q4": 4,
    "Q3": 3,
    "Q2": 2,
    "GPTQ": 4,  # Approximation for GPTQ
    "AWQ": 4,   # Approximation for AWQ
}

DEFAULT_QUANT_FACTOR = 1.0
DEFAULT_BITS_PER_PARAM = 8

REFERENCE_CONTEXT_LENGTH = 2048
KV_CACHE_OVERHEAD_RATIO = 0.2  # typical KV cache size relative to the model at reference context
UNIFIED_MEMORY_VRAM_FRACTION = 0.75
SINGLE_GPU_VRAM_GB = 24
DISK_OVERHEAD_FACTOR = 1.1  # headers, metadata and container overhead

UNIFIED_FITS_LABEL = "Unified memory (ex: Apple silicon, AMD Ryzen™ Al Max+ 395)"
UNIFIED_INSUFFICIENT_LABEL = "Unified memory (insufficient)"
SINGLE_GPU_LABEL = "Single 24GB GPU"
MULTI_GPU_LABEL = "Discrete GPUs (24GB each)"


@dataclass(frozen=True)
class ModelConfig:
    params_billions: float
    quantization: str
    context_length: int


@dataclass(frozen=True)
class KvCacheConfig:
    enabled: bool
    quantization: str = "F16"


@dataclass(frozen=True)
class HardwareConfig:
    memory_mode: str
    system_memory_gb: float


@dataclass(frozen=True)
class Recommendation:
    gpu_type: str
    vram_needed_gb: float    # one decimal place, for display
    fits_unified: bool
    system_ram_needed_gb: float
    gpus_required: int       # 0 if the model does not fit unified memory


@dataclass(frozen=True)
class Estimate:
    """Everything the results panel needs for one set of inputs."""
    required_vram_gb: float
    model_memory_gb: float
    kv_cache_memory_gb: float
    context_scale: float
    on_disk_size_gb: float
    recommendation: Recommendation


def get_model_quant_factor(quant_type):
    """Memory multiplier for the model weights. Unknown types count as Q8."""
    if quant_type not in MODEL_QUANT_FACTORS:
        logger.debug("Unknown model quantization %r, using factor %s", quant_type, DEFAULT_QUANT_FACTOR)
    return MODEL_QUANT_FACTORS.get(quant_type, DEFAULT_QUANT_FACTOR)


def get_kv_cache_quant_factor(quant_type):
    """Memory multiplier for the KV cache. Unknown types count as Q8."""
    if quant_type not in KV_CACHE_QUANT_FACTORS:
        logger.debug("Unknown KV cache quantization %r, using factor %s", quant_type, DEFAULT_QUANT_FACTOR)
    return KV_CACHE_QUANT_FACTORS.get(quant_type, DEFAULT_QUANT_FACTOR)


def get_bits_per_param(quant_type):
    if quant_type not in BITS_PER_PARAM:
        logger.debug("Unknown model quantization %r, assuming %s bits per parameter", quant_type, DEFAULT_BITS_PER_PARAM)
    return BITS_PER_PARAM.get(quant_type, DEFAULT_BITS_PER_PARAM)


def calculate_context_scale(context_length):
    """
    Scale applied to memory for long contexts.

    Contexts at or below the 2048-token reference never shrink memory below
    the baseline; only longer contexts scale it up linearly.
    """
    return max(1, context_length / REFERENCE_CONTEXT_LENGTH)


def calculate_model_memory(model):
    """Model weight memory in GB, scaled by context length."""
    base_model_mem = model.params_billions * get_model_quant_factor(model.quantization)
    return base_model_mem * calculate_context_scale(model.context_length)


def calculate_kv_cache_memory(model, kv_cache):
    """KV cache memory in GB, or 0 when the cache is disabled."""
    if not kv_cache.enabled:
        return 0
    kv_factor = get_kv_cache_quant_factor(kv_cache.quantization)
    context_scale = calculate_context_scale(model.context_length)
    return model.params_billions * kv_factor * context_scale * KV_CACHE_OVERHEAD_RATIO


def calculate_required_vram(model, kv_cache):
    """Total VRAM in GB for single-user inference. Not rounded."""
    return calculate_model_memory(model) + calculate_kv_cache_memory(model, kv_cache)


def get_max_unified_vram(system_memory_gb):
    """Portion of unified memory usable as VRAM."""
    return system_memory_gb * UNIFIED_MEMORY_VRAM_FRACTION


def round_vram_for_display(required_vram):
    """
    Round to one decimal place, with ties going up.

    The float is converted exactly, so 100.25 shows as 100.3 rather than
    the 100.2 that round() would give.
    """
    rounded = Decimal(required_vram).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(rounded)


def discrete_gpus_required(required_vram):
    """Number of 24GB GPUs covering the requirement, never fewer than one."""
    # Exact multiples of 24GB need exactly that many GPUs
    return max(1, int(np.ceil(required_vram / SINGLE_GPU_VRAM_GB)))


def recommend_hardware(required_vram, hardware):
    """
    Pick a hardware configuration for the required VRAM.

    Unified memory either fits within 75% of system memory (one device) or
    does not fit at all (zero devices). Discrete GPUs are 24GB each and as
    many are recommended as needed to cover the requirement; system RAM is
    then recommended to be at least the VRAM requirement.
    """
    vram_needed = round_vram_for_display(required_vram)

    if hardware.memory_mode == UNIFIED_MEMORY:
        unified_limit = get_max_unified_vram(hardware.system_memory_gb)
        if required_vram <= unified_limit:
            return Recommendation(
                gpu_type=UNIFIED_FITS_LABEL,
                vram_needed_gb=vram_needed,
                fits_unified=True,
                system_ram_needed_gb=hardware.system_memory_gb,
                gpus_required=1,
            )
        return Recommendation(
            gpu_type=UNIFIED_INSUFFICIENT_LABEL,
            vram_needed_gb=vram_needed,
            fits_unified=False,
            system_ram_needed_gb=hardware.system_memory_gb,
            gpus_required=0,
        )

    system_ram = max(hardware.system_memory_gb, required_vram)
    if required_vram <= SINGLE_GPU_VRAM_GB:
        return Recommendation(
            gpu_type=SINGLE_GPU_LABEL,
            vram_needed_gb=vram_needed,
            fits_unified=False,
            system_ram_needed_gb=system_ram,
            gpus_required=1,
        )

    gpus_needed = discrete_gpus_required(required_vram)
    return Recommendation(
        gpu_type=MULTI_GPU_LABEL,
        vram_needed_gb=vram_needed,
        fits_unified=False,
        system_ram_needed_gb=system_ram,
        gpus_required=gpus_needed,
    )


def calculate_on_disk_size(model):
    """
    Approximate size of the stored weight file in decimal GB.

    Only the weights are stored, so KV cache and context length play no part.
    """
    total_bits = model.params_billions * 1e9 * get_bits_per_param(model.quantization)
    bytes_needed = total_bits / 8
    gb_needed = bytes_needed / 1e9
    return gb_needed * DISK_OVERHEAD_FACTOR


def estimate(model, kv_cache, hardware):
    """Run the full calculation for one set of inputs."""
    model_memory = calculate_model_memory(model)
    kv_cache_memory = calculate_kv_cache_memory(model, kv_cache)
    required_vram = model_memory + kv_cache_memory

    result = Estimate(
        required_vram_gb=required_vram,
        model_memory_gb=model_memory,
        kv_cache_memory_gb=kv_cache_memory,
        context_scale=calculate_context_scale(model.context_length),
        on_disk_size_gb=calculate_on_disk_size(model),
        recommendation=recommend_hardware(required_vram, hardware),
    )
    logger.debug(
        "Estimated %.2f GB VRAM (%d GPU(s)) for %sB %s at %d tokens",
        required_vram,
        result.recommendation.gpus_required,
        model.params_billions,
        model.quantization,
        model.context_length,
    )
    return result


def vram_scaling_by_context(model, kv_cache, context_lengths):
    """Required VRAM for the same model at each of the given context lengths."""
    return [
        (
            context_length,
            calculate_required_vram(
                ModelConfig(model.params_billions, model.quantization, context_length),
                kv_cache,
            ),
        )
        for context_length in context_lengths
    ]


def get_known_models():
    """Return a dictionary of known models with their parameters and quantization."""
    return {
        # Smaller models (1-3B)
        "TinyLlama (1.1B)": {"params": 1.1, "quant": "Q4"},
        "Phi-2 (2.7B)": {"params": 2.7, "quant": "Q4"},
        "Gemma (2B)": {"params": 2, "quant": "Q4"},

        # Medium models (4-10B)
        "LLaMA 2 (7B)": {"params": 7, "quant": "Q4"},
        "Mistral (7B)": {"params": 7, "quant": "Q4"},
        "Llama 3 (8B)": {"params": 8, "quant": "Q8"},

        # Larger models (11-35B)
        "LLaMA 2 (13B)": {"params": 13, "quant": "Q5"},
        "Gemma 2 (27B)": {"params": 27, "quant": "Q4"},
        "LLaMA (30B)": {"params": 30, "quant": "Q4"},

        # Large models (65-70B)
        "LLaMA (65B)": {"params": 65, "quant": "Q4"},
        "LLaMA 2 (70B)": {"params": 70, "quant": "GPTQ"},
        "Llama 3 (70B)": {"params": 70, "quant": "AWQ"},

        # Mixture of Experts models
        "Mixtral 8x7B": {"params": 47, "quant": "Q4"},  # MoE architecture, total params

        # Very large open models
        "Falcon (180B)": {"params": 180, "quant": "Q4"},
        "Llama 3.1 (405B)": {"params": 405, "quant": "Q4"},
    }
