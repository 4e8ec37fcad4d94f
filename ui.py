import streamlit as st
import pandas as pd
import plotly.express as px

import calc

MEMORY_MODE_LABELS = {
    calc.DISCRETE_GPU: "Discrete GPU",
    calc.UNIFIED_MEMORY: "Unified memory (ex: Apple silicon, AMD Ryzen™ Al Max+ 395)",
}

SCALING_CONTEXT_LENGTHS = (512, 1024, 2048, 4096, 8192, 16384, 32768)


def create_sidebar_inputs(settings):
    """Create sidebar inputs and return the configuration as a dictionary."""
    bounds = settings.bounds
    defaults = settings.defaults

    st.sidebar.header("Model Configuration")

    num_params = st.sidebar.slider(
        "Number of Parameters (Billions)",
        min_value=bounds.params_min,
        max_value=bounds.params_max,
        value=defaults.params_billions,
        step=1,
        key="params",
        help="Number of parameters in billions"
    )

    model_quant = st.sidebar.selectbox(
        "Model Quantization",
        options=calc.MODEL_QUANTIZATIONS,
        index=calc.MODEL_QUANTIZATIONS.index(defaults.model_quant),
        key="model_quant",
        help="Select the model quantization method"
    )

    context_length = st.sidebar.slider(
        "Context Length (Tokens)",
        min_value=bounds.context_min,
        max_value=bounds.context_max,
        value=defaults.context_length,
        step=bounds.context_step,
        key="context_length",
        help="Context length in tokens"
    )

    use_kv_cache = st.sidebar.checkbox(
        "Enable KV Cache",
        value=defaults.use_kv_cache,
        key="use_kv_cache",
        help="Enable or disable KV Cache"
    )

    # KV quantization only matters when the cache is enabled
    kv_cache_quant = defaults.kv_cache_quant
    if use_kv_cache:
        kv_cache_quant = st.sidebar.selectbox(
            "KV Cache Quantization",
            options=calc.KV_CACHE_QUANTIZATIONS,
            index=calc.KV_CACHE_QUANTIZATIONS.index(defaults.kv_cache_quant),
            key="kv_cache_quant",
            help="Select the KV Cache quantization method"
        )

    st.sidebar.markdown("---")
    st.sidebar.header("System Configuration")

    memory_mode = st.sidebar.selectbox(
        "System Type",
        options=calc.MEMORY_MODES,
        index=calc.MEMORY_MODES.index(defaults.memory_mode),
        format_func=lambda mode: MEMORY_MODE_LABELS[mode],
        key="memory_mode",
        help="Select the system type"
    )

    system_memory = st.sidebar.slider(
        "System Memory (GB)",
        min_value=bounds.system_memory_min,
        max_value=bounds.system_memory_max,
        value=defaults.system_memory_gb,
        step=bounds.system_memory_step,
        key="system_memory",
        help="System memory in GB"
    )

    return {
        "num_params": num_params,
        "model_quant": model_quant,
        "context_length": context_length,
        "use_kv_cache": use_kv_cache,
        "kv_cache_quant": kv_cache_quant,
        "memory_mode": memory_mode,
        "system_memory": system_memory,
    }


def config_to_inputs(config):
    """Split the sidebar configuration into the calculator's input records."""
    model = calc.ModelConfig(
        params_billions=config["num_params"],
        quantization=config["model_quant"],
        context_length=config["context_length"],
    )
    kv_cache = calc.KvCacheConfig(
        enabled=config["use_kv_cache"],
        quantization=config["kv_cache_quant"],
    )
    hardware = calc.HardwareConfig(
        memory_mode=config["memory_mode"],
        system_memory_gb=config["system_memory"],
    )
    return model, kv_cache, hardware


def format_gpus_required(gpus_required):
    if gpus_required == 1:
        return "1 (Fits on a single GPU)"
    if gpus_required > 1:
        return str(gpus_required)
    return None


def display_requirements(estimate, memory_mode):
    """Display the hardware requirements panel."""
    recommendation = estimate.recommendation

    st.subheader("Hardware Requirements")
    st.markdown(f"**VRAM Needed:** {recommendation.vram_needed_gb:.1f} GB")
    st.markdown(f"**On-Disk Size:** {estimate.on_disk_size_gb:.2f} GB")
    st.markdown(f"**GPU Config:** {recommendation.gpu_type}")

    gpus_text = format_gpus_required(recommendation.gpus_required)
    if gpus_text is not None:
        st.markdown(f"**Number of GPUs Required:** {gpus_text}")

    st.markdown(f"**System RAM:** {recommendation.system_ram_needed_gb:.1f} GB")

    if memory_mode == calc.UNIFIED_MEMORY:
        if recommendation.fits_unified:
            st.success("Fits in unified memory!")
        else:
            st.error("Exceeds unified memory. Increase system RAM or reduce model size.")


def build_memory_breakdown(estimate):
    """VRAM components as a DataFrame for charting."""
    return pd.DataFrame([
        {"Component": "Model Weights", "Size (GB)": estimate.model_memory_gb},
        {"Component": "KV Cache", "Size (GB)": estimate.kv_cache_memory_gb},
    ])


def build_context_scaling(model, kv_cache, context_lengths=SCALING_CONTEXT_LENGTHS):
    """Required VRAM across context lengths, with the 24GB GPU line for reference."""
    rows = calc.vram_scaling_by_context(model, kv_cache, context_lengths)
    scaling_df = pd.DataFrame(rows, columns=["Context Length (Tokens)", "VRAM (GB)"])
    scaling_df["GPUs Required"] = scaling_df["VRAM (GB)"].apply(calc.discrete_gpus_required)
    return scaling_df


def display_memory_charts(estimate, scaling_df):
    """Create and display the VRAM breakdown and context scaling charts."""
    breakdown_df = build_memory_breakdown(estimate)

    vram_fig = px.pie(
        breakdown_df,
        values="Size (GB)",
        names="Component",
        title=f"VRAM Usage Breakdown: {estimate.required_vram_gb:.1f} GB Total",
        hole=0.4
    )

    scaling_fig = px.line(
        scaling_df,
        x="Context Length (Tokens)",
        y="VRAM (GB)",
        log_x=True,
        markers=True,
        hover_data=["GPUs Required"],
        title="VRAM vs Context Length"
    )
    scaling_fig.add_hline(
        y=calc.SINGLE_GPU_VRAM_GB,
        line_dash="dash",
        annotation_text="Single 24GB GPU"
    )

    st.subheader("Memory Breakdown")
    col1, col2 = st.columns(2)

    with col1:
        st.plotly_chart(vram_fig, use_container_width=True)

    with col2:
        st.plotly_chart(scaling_fig, use_container_width=True)


def build_model_comparison(config, known_models):
    """Estimate every known model with the current KV cache and hardware settings."""
    _, kv_cache, hardware = config_to_inputs(config)

    model_data = []
    for name, specs in known_models.items():
        model = calc.ModelConfig(specs["params"], specs["quant"], config["context_length"])
        result = calc.estimate(model, kv_cache, hardware)
        model_data.append({
            "Model": name,
            "Parameters (B)": specs["params"],
            "Quantization": specs["quant"],
            "VRAM (GB)": result.recommendation.vram_needed_gb,
            "On-Disk Size (GB)": round(result.on_disk_size_gb, 2),
            "GPU Config": result.recommendation.gpu_type,
            "GPUs Required": result.recommendation.gpus_required,
        })

    return pd.DataFrame(model_data).sort_values("Parameters (B)").reset_index(drop=True)


def display_model_comparison(config, known_models):
    """Display known models estimated with the current settings."""
    with st.expander("Comparison with Known Models"):
        st.markdown(
            f"Estimated at {config['context_length']} tokens with "
            f"{MEMORY_MODE_LABELS[config['memory_mode']]} and {config['system_memory']} GB system memory."
        )
        comparison_df = build_model_comparison(config, known_models)
        st.dataframe(comparison_df, use_container_width=True, hide_index=True)
