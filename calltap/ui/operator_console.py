"""Operator console for steering a live call from the terminal."""

import logging
from typing import Optional, List, Dict, TextIO
from pubsub import pub
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from ..models.events import SessionEvent


logger = logging.getLogger(__name__)


class OperatorConsole:
    """Prompts the operator and reports recording outcomes."""
    
    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        """Initialize operator console.
        
        Args:
            console: Rich console to draw on (stdout by default)
            stream: Input stream for prompts (stdin by default)
        """
        self.console = console or Console()
        self.stream = stream
    
    def wait_for_answer(self) -> None:
        """Block until the operator confirms the call was answered."""
        self.console.input(
            "Press ENTER once the call is answered to start receiving audio...",
            stream=self.stream,
        )
    
    def prompt_message(self, presets: Optional[List[Dict[str, str]]] = None) -> str:
        """Ask for the message the assistant should say.
        
        Args:
            presets: Quick-pick entries with 'text' (label) and 'message' keys
            
        Returns:
            The chosen preset message, the typed text, or "" to skip
        """
        presets = presets or []
        if presets:
            table = Table(title="Quick messages")
            table.add_column("#", justify="right", style="cyan")
            table.add_column("Button")
            table.add_column("Message", style="green")
            for i, preset in enumerate(presets, start=1):
                table.add_row(str(i), preset.get("text", ""), preset.get("message", ""))
            self.console.print(table)
        
        answer = Prompt.ask(
            "Enter the message for the assistant to say",
            console=self.console,
            default="",
            show_default=False,
            stream=self.stream,
        ).strip()
        
        if answer.isdigit() and 1 <= int(answer) <= len(presets):
            return presets[int(answer) - 1].get("message", "")
        return answer
    
    def subscribe(self, topic: str = "session.events") -> None:
        """Print every published session event."""
        pub.subscribe(self.on_session_event, topic)
    
    def on_session_event(self, event: SessionEvent) -> None:
        if event.event_type == "saved":
            self.console.print(f"✅ WAV file saved as {event.file_path} "
                               f"({event.total_bytes} bytes)", style="green")
        elif event.event_type == "failed":
            self.console.print(f"❌ Recording lost ({event.total_bytes} bytes): {event.error}",
                               style="bold red")
        else:
            self.console.print(f"No audio received in session {event.session_id}",
                               style="yellow")
