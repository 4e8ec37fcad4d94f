import pytest

import calc
import ui


def make_config(**overrides):
    config = {
        "num_params": 65,
        "model_quant": "Q4",
        "context_length": 4096,
        "use_kv_cache": True,
        "kv_cache_quant": "F16",
        "memory_mode": calc.DISCRETE_GPU,
        "system_memory": 128,
    }
    config.update(overrides)
    return config


def test_config_to_inputs():
    model, kv_cache, hardware = ui.config_to_inputs(make_config(use_kv_cache=False))
    assert model == calc.ModelConfig(65, "Q4", 4096)
    assert kv_cache.enabled is False
    assert hardware == calc.HardwareConfig(calc.DISCRETE_GPU, 128)


def test_format_gpus_required():
    assert ui.format_gpus_required(1) == "1 (Fits on a single GPU)"
    assert ui.format_gpus_required(5) == "5"
    assert ui.format_gpus_required(0) is None


def test_memory_breakdown_sums_to_total():
    estimate = calc.estimate(*ui.config_to_inputs(make_config()))
    breakdown = ui.build_memory_breakdown(estimate)
    assert list(breakdown["Component"]) == ["Model Weights", "KV Cache"]
    assert breakdown["Size (GB)"].sum() == pytest.approx(estimate.required_vram_gb)


def test_context_scaling_frame():
    model, kv_cache, _ = ui.config_to_inputs(make_config())
    scaling = ui.build_context_scaling(model, kv_cache, [2048, 4096])
    assert list(scaling["Context Length (Tokens)"]) == [2048, 4096]
    assert list(scaling["VRAM (GB)"]) == pytest.approx([58.5, 117])
    assert list(scaling["GPUs Required"]) == [3, 5]


def test_model_comparison_uses_current_settings():
    known_models = {
        "Big": {"params": 70, "quant": "Q4"},
        "Small": {"params": 7, "quant": "Q4"},
    }
    comparison = ui.build_model_comparison(make_config(memory_mode=calc.UNIFIED_MEMORY, system_memory=64), known_models)

    assert list(comparison["Model"]) == ["Small", "Big"]
    assert list(comparison["GPUs Required"]) == [1, 0]
    assert comparison.loc[0, "GPU Config"] == calc.UNIFIED_FITS_LABEL


def test_context_scaling_default_lengths():
    model, kv_cache, _ = ui.config_to_inputs(make_config(use_kv_cache=False))
    scaling = ui.build_context_scaling(model, kv_cache)
    assert list(scaling["Context Length (Tokens)"]) == list(ui.SCALING_CONTEXT_LENGTHS)
    # 65B Q4 fits two GPUs up to the reference context, then grows
    assert list(scaling["GPUs Required"]) == [2, 2, 2, 3, 6, 11, 22]
