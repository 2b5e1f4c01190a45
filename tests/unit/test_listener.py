"""Unit tests for StreamListener frame handling."""

import logging
import pytest
from unittest.mock import Mock

from calltap.audio.session import AudioSession
from calltap.errors import EncodingOverflow, StorageWriteFailure
from calltap.transport.listener import StreamListener
from calltap.transport.reconnect import ReconnectPolicy


@pytest.mark.unit
class TestStreamListenerFrames:
    """Test cases for StreamListener frame routing and saving."""
    
    def test_binary_frame_appended(self):
        """Test that binary frames grow the session buffer."""
        listener = StreamListener(Mock())
        session = AudioSession()
        
        listener._on_binary(session, b'\x00' * 10)
        listener._on_binary(session, b'\x01' * 6)
        
        assert session.finalize() == b'\x00' * 10 + b'\x01' * 6
    
    def test_late_frame_dropped(self, caplog):
        """Test that a frame for a finalized session is logged and dropped."""
        listener = StreamListener(Mock())
        session = AudioSession()
        session.append(b'\x00' * 8)
        session.finalize()
        
        with caplog.at_level(logging.WARNING, logger="calltap.transport.listener"):
            listener._on_binary(session, b'\xff' * 4)
        
        assert session.size() == 8
        assert session.frame_count == 1
        assert "Dropping late frame" in caplog.text
    
    def test_save_collects_paths(self):
        """Test that written files are collected and skipped sessions are not."""
        service = Mock()
        service.finish_session.side_effect = ["/data/a.wav", None]
        listener = StreamListener(service, policy=ReconnectPolicy())
        
        listener._save(AudioSession())
        listener._save(AudioSession())
        
        assert listener.saved_files == ["/data/a.wav"]
    
    @pytest.mark.parametrize("error", [
        StorageWriteFailure("Disk full"),
        EncodingOverflow(2 ** 32, 2 ** 32 - 37),
    ])
    def test_save_failure_logged(self, error, caplog):
        """Test that encode and write failures are logged without stopping the listener."""
        service = Mock()
        service.finish_session.side_effect = error
        listener = StreamListener(service)
        
        with caplog.at_level(logging.ERROR, logger="calltap.transport.listener"):
            listener._save(AudioSession(session_id="lost"))
        
        assert listener.saved_files == []
        assert "lost" in caplog.text
