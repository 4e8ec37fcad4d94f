def get_reference_information():
    """Return reference information as a markdown string."""
    return """
### How the Estimate Works:
- **Model memory**: parameters (billions) × quantization factor, where Q8 = 1 GB per billion parameters
- **Context scaling**: memory grows linearly with context length beyond 2048 tokens; shorter contexts never reduce it
- **KV cache**: parameters × KV quantization factor × context scale × 0.2
- **Total VRAM**: model memory + KV cache memory

### KV Cache Explained:
- **What it is**: Storage of previously computed attention keys (K) and values (V) during inference
- **Why it matters**: Prevents recalculating attention for previous tokens when generating new tokens
- **Scaling**: Grows linearly with context length
- **Quantization**: The cache can be stored at lower precision (Q8, Q5, Q4) independently of the model weights

### Notes on Quantization:
- **Q2-Q8**: Refers to bits per weight in quantized models
- **F16/F32**: Full precision floating point (16/32 bits per weight)
- **GPTQ/AWQ**: Advanced quantization methods (stored at ~4 bits per weight, slightly more memory at runtime)

### Memory Architecture:
- **Discrete GPU**: Recommendations assume 24GB cards; larger models are split across several
- **Unified memory**: Up to 75% of system memory is treated as usable VRAM (ex: Apple silicon, AMD Ryzen™ Al Max+ 395)
- **System RAM**: With discrete GPUs, system RAM should be at least as large as the VRAM requirement so weights can be staged

### On-Disk Size:
- Depends only on parameters and model quantization
- Includes ~10% for file format overhead such as headers and metadata

### References:
- These calculations are approximations for single-user inference (batch size 1)
- Actual requirements vary with runtime, architecture and software optimizations
"""
