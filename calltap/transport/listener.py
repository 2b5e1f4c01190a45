"""WebSocket listener that records the monitor stream of a live call."""

import asyncio
import logging
import aiohttp
from typing import List, Optional

from ..audio.session import AudioSession
from ..errors import (
    EncodingOverflow,
    SessionClosed,
    StorageWriteFailure,
    TransportError,
)
from ..services.recording_service import RecordingService
from .reconnect import ConnectionState, ReconnectPolicy

logger = logging.getLogger(__name__)


class StreamListener:
    """Receives PCM frames over a WebSocket and writes one WAV file per connection."""
    
    def __init__(self,
                 recording_service: RecordingService,
                 policy: Optional[ReconnectPolicy] = None,
                 connect_timeout: float = 30.0):
        """Initialize stream listener.
        
        Args:
            recording_service: Creates sessions and writes them out on close
            policy: Reconnect policy (defaults to 5 attempts, 5s apart)
            connect_timeout: Seconds allowed to open the TCP connection
        """
        self.recording_service = recording_service
        self.policy = policy or ReconnectPolicy()
        self.connect_timeout = connect_timeout
        self.saved_files: List[str] = []
        self.last_error: Optional[TransportError] = None
    
    async def run(self, listen_url: str) -> List[str]:
        """Record from the listen URL until reconnects are exhausted or cancelled.
        
        Returns:
            Paths of the WAV files written
        """
        self.policy.start()
        
        try:
            timeout = aiohttp.ClientTimeout(total=None, sock_connect=self.connect_timeout)
            async with aiohttp.ClientSession(timeout=timeout) as http:
                while True:
                    await self._record_connection(http, listen_url)
                    
                    delay = self.policy.on_disconnected()
                    if delay is None:
                        break
                    await asyncio.sleep(delay)
                    self.policy.on_retry()
        finally:
            if self.policy.state != ConnectionState.FAILED:
                self.policy.stop()
        
        return self.saved_files
    
    async def _record_connection(self, http: aiohttp.ClientSession, listen_url: str) -> None:
        """Run one connection from connect to close, then save what it delivered."""
        logger.info(f"Attempting to connect to WebSocket: {listen_url}")
        session: Optional[AudioSession] = None
        
        try:
            async with http.ws_connect(listen_url) as ws:
                logger.info("WebSocket connection established")
                self.policy.on_connected()
                session = self.recording_service.create_session()
                
                async for msg in ws:
                    if msg.type == aiohttp.WSMsgType.BINARY:
                        self._on_binary(session, msg.data)
                    elif msg.type == aiohttp.WSMsgType.TEXT:
                        logger.info(f"Received message: {msg.data}")
                    elif msg.type == aiohttp.WSMsgType.ERROR:
                        self._on_transport_error(TransportError(f"WebSocket error: {ws.exception()}"))
                        break
                else:
                    if ws.close_code != aiohttp.WSCloseCode.OK or ws.exception() is not None:
                        self._on_transport_error(TransportError(
                            f"WebSocket closed abnormally (code {ws.close_code}, "
                            f"error {ws.exception()!r})"
                        ))
                
                logger.info(f"WebSocket connection closed (code {ws.close_code})")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._on_transport_error(TransportError(f"WebSocket connection failed: {e!r}"))
        finally:
            if session is not None:
                self._save(session)
    
    def _on_binary(self, session: AudioSession, data: bytes) -> None:
        try:
            session.append(data)
        except SessionClosed as e:
            logger.warning(f"Dropping late frame: {e}")
    
    def _on_transport_error(self, error: TransportError) -> None:
        logger.error(str(error))
        self.last_error = error
    
    def _save(self, session: AudioSession) -> None:
        try:
            file_path = self.recording_service.finish_session(session)
        except (EncodingOverflow, StorageWriteFailure) as e:
            logger.error(f"Recording for session {session.session_id} was not saved: {e}")
            return
        
        if file_path:
            self.saved_files.append(file_path)
