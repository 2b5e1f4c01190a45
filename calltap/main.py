"""Main application entry point for CallTap."""

import sys
import asyncio
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from calltap.audio.session_pub import SessionEventPublisher
from calltap.errors import ControlRequestError
from calltap.services.call_client import VapiClient
from calltap.services.recording_service import RecordingService
from calltap.storage.file_manager import FileManager
from calltap.transport.listener import StreamListener
from calltap.transport.reconnect import ReconnectPolicy
from calltap.ui.operator_console import OperatorConsole

from .config import CallTapConfig

logger = logging.getLogger(__name__)

class Server:

    def __init__(self, config_path: Optional[str], log_level: Optional[str] = None):
        # Load configuration
        self.config = CallTapConfig(config_path)
        # Set up logging (override config with command line if specified)
        level = log_level or self.config.get('logging.level', 'INFO')
        setup_logging(self.config, level)

    def init(self):
        # Initialize services
        logger.info("Initializing services...")
        
        audio_settings = self.config.get_audio_settings()
        logger.info(f"Audio settings: {audio_settings['sample_rate']}Hz, "
                    f"{audio_settings['channels']} channels, "
                    f"{audio_settings['bits_per_sample']}-bit")
        
        topic = self.config.get('events.topic', 'session.events')
        self.publisher = SessionEventPublisher(topic)
        self.operator = OperatorConsole()
        self.operator.subscribe(topic)
        
        self.file_manager = FileManager(self.config.get_data_directory())
        self.recording_service = RecordingService(
            self.file_manager,
            publisher=self.publisher,
            **audio_settings
        )
        self.policy = ReconnectPolicy(**self.config.get_reconnect_settings())
        self.listener = StreamListener(
            self.recording_service,
            policy=self.policy,
            connect_timeout=self.config.get('reconnect.connect_timeout_seconds', 30.0),
        )

    def create_client(self) -> VapiClient:
        return VapiClient(
            api_key=self.config.get_api_key(),
            assistant_id=self.config.get('vapi.assistant_id'),
            phone_number_id=self.config.get('vapi.phone_number_id'),
            customer_number=self.config.get('vapi.customer_number'),
            api_base=self.config.get('vapi.api_base', 'https://api.vapi.ai'),
        )

    def run(self, listen_url: Optional[str] = None) -> List[str]:
        """Place the call unless a listen URL is given, prompt the operator, then record."""
        client = None
        control_url = None
        message = ""
        
        if listen_url is None:
            client = self.create_client()
            call = asyncio.run(client.initiate_call())
            message = self.prompt_operator()
            listen_url = call.listen_url
            control_url = call.control_url
        
        return asyncio.run(self.record(listen_url, control_url, message, client))

    def prompt_operator(self) -> str:
        # Runs on the calling thread, outside any event loop, so Ctrl-C interrupts stdin reads
        self.operator.wait_for_answer()
        return self.operator.prompt_message(self.config.get_presets())

    async def record(self,
                     listen_url: str,
                     control_url: Optional[str] = None,
                     message: str = "",
                     client: Optional[VapiClient] = None) -> List[str]:
        if message and client is not None and control_url:
            try:
                await client.say(control_url, message)
            except ControlRequestError as e:
                logger.error(str(e))
        elif client is not None:
            logger.info("No message entered, skipping injection")
        
        saved_files = await self.listener.run(listen_url)
        logger.info(f"Listener finished, {len(saved_files)} recording(s) saved")
        return saved_files



def setup_logging(config, level: str = "INFO") -> None:

    """Set up logging configuration from YAML config."""
    # Get log file path from config
    log_file_path = config.get('logging.file_path', 'data/logs/calltap.log')
    console_output = config.get('logging.console_output', True)
    
    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)
    
    # Set up handlers
    handlers = []
    
    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)
    
    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)
    
    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)
    
    # Log startup
    logger = logging.getLogger(__name__)
    logger.info("="*50)
    logger.info("CallTap application starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("="*50)


def main() -> None:
    """Main entry point for CallTap application."""
    load_dotenv()
    
    parser = argparse.ArgumentParser(
        description="CallTap - Record the audio of an outbound VAPI call to WAV"
    )
    
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: looks for calltap.yaml)"
    )
    
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, else INFO)"
    )
    
    parser.add_argument(
        "--listen-url",
        type=str,
        help="Record from an existing monitor WebSocket instead of placing a call"
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version="CallTap v0.1.0"
    )
    
    args = parser.parse_args()

    try:
        server = Server(args.config, args.log_level)
        server.init()
        server.run(args.listen_url)
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
