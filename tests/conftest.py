"""Pytest configuration and fixtures for CallTap tests."""

import pytest
import tempfile
import logging
from pathlib import Path
import numpy as np
import yaml
from pubsub import pub


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def sample_audio_chunk():
    """Generate 1024 frames of 16-bit stereo PCM (440 Hz left, 880 Hz right)."""
    sample_rate = 16000
    duration = 1024 / sample_rate  # ~0.064 seconds
    
    t = np.linspace(0, duration, 1024, False)
    left = np.sin(2 * np.pi * 440 * t)
    right = np.sin(2 * np.pi * 880 * t)
    
    # Interleave channels and convert to 16-bit integers
    stereo = np.column_stack((left, right)).ravel()
    audio_data = (stereo * 32767).astype('<i2')
    return audio_data.tobytes()


@pytest.fixture
def test_config():
    """Test configuration settings."""
    return {
        "vapi": {
            "api_base": "https://api.vapi.ai",
            "assistant_id": "test-assistant",
            "phone_number_id": "test-phone-number",
            "customer_number": "+15550000000",
            "api_key_env": "CALLTAP_TEST_API_KEY"
        },
        "audio": {
            "sample_rate": 16000,
            "channels": 2,
            "bits_per_sample": 16
        },
        "reconnect": {
            "max_attempts": 0,
            "delay_seconds": 0.0
        },
        "storage": {
            "data_directory": "data"
        },
        "logging": {
            "level": "DEBUG",
            "file_path": "data/logs/calltap.log",
            "console_output": False
        },
        "control": {
            "presets": [
                {"text": "Send Greeting", "message": "Hello! How can I assist you today?"},
                {"text": "Send Goodbye", "message": "Goodbye!"}
            ]
        }
    }


@pytest.fixture
def config_file(temp_data_dir, test_config):
    """Write the test configuration to a YAML file and return its path."""
    path = Path(temp_data_dir) / "calltap.yaml"
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(test_config, f)
    return str(path)


@pytest.fixture
def restore_root_logging():
    """Put back root logger handlers replaced by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture(autouse=True)
def clear_subscriptions():
    """Drop pub/sub listeners registered during a test."""
    yield
    pub.unsubAll()
