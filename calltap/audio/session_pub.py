"""Session event publisher for pub/sub notification of recording outcomes."""

import logging
from pubsub import pub
from ..models.events import SessionEvent

logger = logging.getLogger(__name__)


class SessionEventPublisher:
    """Publishes session lifecycle events using pubsub.pub."""
    
    def __init__(self, topic: str = "session.events"):
        """Initialize session event publisher.
        
        Args:
            topic: Pub/sub topic name for session events
        """
        self.topic = topic
        logger.info(f"SessionEventPublisher initialized with topic: {topic}")
    
    def publish(self, event: SessionEvent) -> None:
        """Publish a session event to the pub/sub topic."""
        pub.sendMessage(self.topic, event=event)
        logger.debug(f"Published session event: {event.event_type} for {event.session_id}")
