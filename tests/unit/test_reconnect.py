"""Unit tests for ReconnectPolicy state machine."""

import pytest

from calltap.errors import InvalidTransition
from calltap.transport.reconnect import ConnectionState, ReconnectPolicy


@pytest.mark.unit
class TestReconnectPolicy:
    """Test cases for ReconnectPolicy."""
    
    def test_initial_state(self):
        """Test the policy starts idle with no attempts."""
        policy = ReconnectPolicy()
        
        assert policy.state == ConnectionState.IDLE
        assert policy.attempts == 0
        assert policy.max_attempts == 5
        assert policy.delay_seconds == 5.0
    
    def test_connect_and_disconnect(self):
        """Test a connection that closes once and reconnects."""
        policy = ReconnectPolicy(max_attempts=3, delay_seconds=2.0)
        
        policy.start()
        assert policy.state == ConnectionState.CONNECTING
        policy.on_connected()
        assert policy.state == ConnectionState.CONNECTED
        
        delay = policy.on_disconnected()
        assert delay == 2.0
        assert policy.state == ConnectionState.RETRYING
        assert policy.attempts == 1
        
        policy.on_retry()
        assert policy.state == ConnectionState.CONNECTING
    
    def test_exhausts_attempts(self):
        """Test that consecutive failures end in FAILED."""
        policy = ReconnectPolicy(max_attempts=2, delay_seconds=1.0)
        policy.start()
        
        assert policy.on_disconnected() == 1.0
        policy.on_retry()
        assert policy.on_disconnected() == 1.0
        policy.on_retry()
        assert policy.on_disconnected() is None
        assert policy.state == ConnectionState.FAILED
        assert policy.attempts == 2
    
    def test_successful_connect_resets_attempts(self):
        """Test that a successful connection resets the attempt counter."""
        policy = ReconnectPolicy(max_attempts=1, delay_seconds=0.0)
        policy.start()
        
        assert policy.on_disconnected() == 0.0
        policy.on_retry()
        policy.on_connected()
        assert policy.attempts == 0
        
        assert policy.on_disconnected() == 0.0
        assert policy.state == ConnectionState.RETRYING
    
    def test_zero_attempts_disables_reconnect(self):
        """Test that max_attempts=0 fails on the first close."""
        policy = ReconnectPolicy(max_attempts=0)
        policy.start()
        policy.on_connected()
        
        assert policy.on_disconnected() is None
        assert policy.state == ConnectionState.FAILED
    
    def test_backoff(self):
        """Test exponential backoff capped at the maximum delay."""
        policy = ReconnectPolicy(delay_seconds=1.0, backoff_multiplier=2.0, max_delay_seconds=5.0)
        
        assert policy.next_delay(1) == 1.0
        assert policy.next_delay(2) == 2.0
        assert policy.next_delay(3) == 4.0
        assert policy.next_delay(4) == 5.0
    
    def test_restart_after_failure(self):
        """Test that a failed policy can be started again."""
        policy = ReconnectPolicy(max_attempts=0)
        policy.start()
        policy.on_disconnected()
        
        policy.start()
        assert policy.state == ConnectionState.CONNECTING
        assert policy.attempts == 0
    
    def test_stop(self):
        """Test that stop returns to IDLE from any state."""
        policy = ReconnectPolicy()
        policy.start()
        policy.on_connected()
        policy.stop()
        
        assert policy.state == ConnectionState.IDLE
    
    @pytest.mark.parametrize("action", ["on_connected", "on_disconnected", "on_retry"])
    def test_invalid_transitions_from_idle(self, action):
        """Test that only start() is accepted while idle."""
        policy = ReconnectPolicy()
        
        with pytest.raises(InvalidTransition):
            getattr(policy, action)()
        assert policy.state == ConnectionState.IDLE
    
    def test_cannot_start_twice(self):
        """Test that start() is rejected while connecting."""
        policy = ReconnectPolicy()
        policy.start()
        
        with pytest.raises(InvalidTransition):
            policy.start()
