"""Simple YAML configuration loader for CallTap."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "calltap.yaml"


class CallTapConfig:
    """CallTap configuration loader."""
    
    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.
        
        Args:
            config_path: Path to YAML config file. If None, looks for calltap.yaml
                        in the current directory.
        """
        self.config_file = Path(config_path or DEFAULT_CONFIG_FILE)
        
        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
        
        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()
    
    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e
        
        if not config:
            raise ValueError("Configuration file is empty")
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")
        
        # Resolve relative paths
        self._resolve_paths(config)
        
        logger.info("Configuration loaded successfully")
        return config
    
    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent
        
        # Resolve data directory
        if 'storage' in config and 'data_directory' in config['storage']:
            data_dir = config['storage']['data_directory']
            if not os.path.isabs(data_dir):
                config['storage']['data_directory'] = str(config_dir / data_dir)
        
        # Resolve log file path
        if 'logging' in config and 'file_path' in config['logging']:
            log_path = config['logging']['file_path']
            if not os.path.isabs(log_path):
                config['logging']['file_path'] = str(config_dir / log_path)
    
    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'audio.sample_rate').
        
        Args:
            key_path: Dot-separated key path (e.g., 'reconnect.max_attempts')
            default: Default value if key not found
            
        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config
        
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        
        return value
    
    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.
        
        Args:
            key_path: Dot-separated path to config value (e.g., 'audio.channels')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config
        
        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]
        
        # Set the final value
        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")
    
    def get_api_key(self) -> str:
        """Get VAPI API key from the environment - CRASHES if not set."""
        env_var = self.get('vapi.api_key_env', 'VAPI_API_KEY')
        api_key = os.environ.get(env_var)
        if not api_key:
            raise ValueError(f"Environment variable {env_var} is not set")
        return api_key
    
    def get_data_directory(self) -> str:
        """Get data directory path."""
        data_dir = self.get('storage.data_directory', 'data')
        return str(Path(data_dir).absolute())
    
    def get_audio_settings(self) -> Dict[str, int]:
        """Get PCM stream parameters of the monitor feed.
        
        Raises:
            ValueError: If a value is not a positive integer or the sample width
                        is not a whole number of bytes
        """
        settings = {
            "sample_rate": self.get('audio.sample_rate', 16000),
            "channels": self.get('audio.channels', 2),
            "bits_per_sample": self.get('audio.bits_per_sample', 16),
        }
        
        for name, value in settings.items():
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"audio.{name} must be a positive integer, got {value!r}")
        if settings["bits_per_sample"] % 8:
            raise ValueError(f"audio.bits_per_sample must be a multiple of 8, "
                             f"got {settings['bits_per_sample']}")
        
        return settings
    
    def get_reconnect_settings(self) -> Dict[str, Any]:
        """Get ReconnectPolicy keyword arguments."""
        settings = {
            "max_attempts": self.get('reconnect.max_attempts', 5),
            "delay_seconds": self.get('reconnect.delay_seconds', 5.0),
            "backoff_multiplier": self.get('reconnect.backoff_multiplier', 1.0),
            "max_delay_seconds": self.get('reconnect.max_delay_seconds', 60.0),
        }
        
        if not isinstance(settings["max_attempts"], int) or settings["max_attempts"] < 0:
            raise ValueError(f"reconnect.max_attempts must be a non-negative integer, "
                             f"got {settings['max_attempts']!r}")
        for name in ("delay_seconds", "backoff_multiplier", "max_delay_seconds"):
            if not isinstance(settings[name], (int, float)) or settings[name] < 0:
                raise ValueError(f"reconnect.{name} must be a non-negative number, "
                                 f"got {settings[name]!r}")
        
        return settings
    
    def get_presets(self) -> List[Dict[str, str]]:
        """Get quick-pick operator messages.
        
        Each entry needs a non-empty 'message'; 'text' (the button label)
        falls back to the message itself.
        
        Raises:
            ValueError: If control.presets is not a list of valid entries
        """
        presets = self.get('control.presets', []) or []
        if not isinstance(presets, list):
            raise ValueError("control.presets must be a list")
        
        normalized = []
        for i, preset in enumerate(presets, start=1):
            if not isinstance(preset, dict) or not preset.get('message'):
                raise ValueError(f"control.presets entry {i} needs a 'message'")
            message = str(preset['message'])
            normalized.append({"text": str(preset.get('text') or message), "message": message})
        
        return normalized
