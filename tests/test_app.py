"""Smoke tests running the Streamlit script headlessly."""

from streamlit.testing.v1 import AppTest

APP_PATH = "../app.py"


def markdown_text(at):
    return "\n".join(element.value for element in at.markdown)


def test_default_inputs():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()

    assert not at.exception
    text = markdown_text(at)
    assert "**VRAM Needed:** 117.0 GB" in text
    assert "**Number of GPUs Required:** 5" in text
    assert "**System RAM:** 128.0 GB" in text


def test_unified_memory_fits():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.selectbox(key="memory_mode").set_value("UNIFIED_MEMORY")
    at.slider(key="system_memory").set_value(256)
    at.run()

    assert not at.exception
    assert at.success[0].value == "Fits in unified memory!"
    assert "**System RAM:** 256.0 GB" in markdown_text(at)


def test_disabling_kv_cache_hides_kv_quantization():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.checkbox(key="use_kv_cache").uncheck().run()

    assert not at.exception
    assert all(box.key != "kv_cache_quant" for box in at.selectbox)
    assert "**VRAM Needed:** 65.0 GB" in markdown_text(at)
