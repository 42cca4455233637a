#!/usr/bin/env python3
"""
Basic tests for the Clarifai Tagger.
These cover imports, configuration, data models and logging without
touching the network.
"""

import importlib

import pytest


def test_imports():
    """Test that all modules can be imported."""
    from clarifai_tagger import (  # noqa: F401
        config, logging, models, credentials, classifier, clarifai_client, tagger, main
    )


def test_config_defaults(monkeypatch):
    """Test configuration loading with defaults."""
    for name in ("CLARIFAI_API_BASE", "CLARIFAI_MODEL_ID", "CLARIFAI_KEYS_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    from clarifai_tagger.config import Settings, GENERAL_MODEL_ID

    settings = Settings(_env_file=None)
    assert settings.clarifai_api_base == "https://api.clarifai.com"
    assert settings.clarifai_model_id == GENERAL_MODEL_ID
    assert settings.clarifai_keys_file == "keys.txt"
    assert settings.log_level == "INFO"


def test_config_from_environment(monkeypatch):
    """Test configuration overrides from environment variables."""
    monkeypatch.setenv("CLARIFAI_API_BASE", "https://clarifai.test/")
    monkeypatch.setenv("CLARIFAI_KEYS_FILE", "/secrets/keys.txt")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    import clarifai_tagger.config
    importlib.reload(clarifai_tagger.config)
    settings = clarifai_tagger.config.settings

    assert settings.clarifai_api_base == "https://clarifai.test"
    assert settings.clarifai_keys_file == "/secrets/keys.txt"
    assert settings.log_level == "DEBUG"

    monkeypatch.undo()
    importlib.reload(clarifai_tagger.config)


@pytest.mark.parametrize("name, value", [
    ("CLARIFAI_API_BASE", "api.clarifai.com"),
    ("LOG_LEVEL", "LOUD"),
    ("CLARIFAI_MODEL_ID", "   "),
])
def test_config_validation(monkeypatch, name, value):
    """Test that invalid settings are rejected."""
    from pydantic import ValidationError
    from clarifai_tagger.config import Settings

    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_models():
    """Test data models."""
    from clarifai_tagger.models import (
        Concept, Credentials, ImageInput, OutputData, PredictOutput, PredictRequest
    )

    output = PredictOutput(data=OutputData(concepts=[
        Concept(name="dog", value=0.98),
        Concept(name="forest", value=0.91),
        Concept(name="dog", value=0.52),
    ]))
    assert output.tag_names() == {"dog", "forest"}
    assert PredictOutput().tag_names() == set()

    request = PredictRequest(inputs=[
        ImageInput.from_url("http://example.com/a.png"),
        ImageInput.from_bytes(b"\x89PNG"),
    ])
    assert request.dict(exclude_none=True) == {"inputs": [
        {"data": {"image": {"url": "http://example.com/a.png"}}},
        {"data": {"image": {"base64": "iVBORw=="}}},
    ]}

    credentials = Credentials(api_key="app-id", api_secret="app-secret")
    assert "app-secret" not in repr(credentials)
    with pytest.raises(Exception):
        credentials.api_key = "other"


def test_logging():
    """Test logging setup and metrics."""
    from clarifai_tagger.logging import setup_logging, get_logger, MetricsLogger

    setup_logging("DEBUG")
    logger = get_logger("test")
    logger.info("Test log message")

    metrics = MetricsLogger()
    metrics.log_compute(submitted=3, tagged=2, tags_count=5, compute_time=1.0)
    metrics.log_compute(submitted=1, tagged=1, tags_count=2, compute_time=0.5)

    current_metrics = metrics.get_metrics()
    assert current_metrics["computes"] == 2
    assert current_metrics["references_submitted"] == 4
    assert current_metrics["references_tagged"] == 3
    assert current_metrics["tags_assigned"] == 7
    assert current_metrics["compute_time"] == pytest.approx(1.5)
