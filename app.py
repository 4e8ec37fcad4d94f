import streamlit as st

# Import our custom modules
import ui
import calc
import info
from log_config import setup_logging
from settings import load_settings

settings = load_settings()
logger = setup_logging(settings.log_level)

# Set page config
st.set_page_config(page_title="LLM Inference Hardware Calculator", layout="wide")

# Add title and description
st.title("LLM Inference Hardware Calculator")
st.markdown("""
Estimate VRAM & System RAM for single-user inference (Batch=1).
Model quant & KV cache quant are configured separately.
""")

# Generate the UI components and get user inputs
model_config = ui.create_sidebar_inputs(settings)
model, kv_cache, hardware = ui.config_to_inputs(model_config)

# Calculate requirements based on user inputs
estimate = calc.estimate(model, kv_cache, hardware)
logger.info(
    "%sB %s, %d tokens, %s: %.1f GB VRAM, %.2f GB on disk",
    model.params_billions,
    model.quantization,
    model.context_length,
    hardware.memory_mode,
    estimate.required_vram_gb,
    estimate.on_disk_size_gb,
)

ui.display_requirements(estimate, hardware.memory_mode)

ui.display_memory_charts(estimate, ui.build_context_scaling(model, kv_cache))

ui.display_model_comparison(model_config, calc.get_known_models())

# Display reference information
st.markdown("---")
st.markdown(info.get_reference_information())
