"""VAPI client for starting outbound calls and injecting messages into them."""

import logging
import aiohttp
from typing import Dict, Any

from ..errors import CallSetupError, ControlRequestError
from ..models.call import CallInfo

logger = logging.getLogger(__name__)


class VapiClient:
    """Minimal async client for the VAPI call and live-control endpoints."""
    
    def __init__(self,
                 api_key: str,
                 assistant_id: str,
                 phone_number_id: str,
                 customer_number: str,
                 api_base: str = "https://api.vapi.ai",
                 timeout_seconds: float = 30.0):
        """Initialize VAPI client.
        
        Args:
            api_key: VAPI private API key
            assistant_id: Assistant that will run the call
            phone_number_id: VAPI phone number placing the call
            customer_number: E.164 number to dial
            api_base: Base URL of the VAPI REST API
            timeout_seconds: Total timeout per HTTP request
        """
        self.api_key = api_key
        self.assistant_id = assistant_id
        self.phone_number_id = phone_number_id
        self.customer_number = customer_number
        self.api_base = api_base.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        
        logger.info(f"VapiClient initialized for assistant: {assistant_id}")
    
    async def initiate_call(self) -> CallInfo:
        """Place the outbound call and return its monitor handles.
        
        Returns:
            CallInfo with the listen (audio) and control URLs
            
        Raises:
            CallSetupError: If the API rejects the call or the response lacks monitor URLs
        """
        logger.info("Starting the call initiation process...")
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        
        data = {
            "assistantId": self.assistant_id,
            "customer": {
                "number": self.customer_number
            },
            "phoneNumberId": self.phone_number_id
        }
        
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(f"{self.api_base}/call/phone",
                                        headers=headers, json=data) as response:
                    if response.status >= 300:
                        error_text = await response.text()
                        raise CallSetupError(f"VAPI API error: {response.status} - {error_text}")
                    
                    result = await response.json()
        except aiohttp.ClientError as e:
            raise CallSetupError(f"Error initiating call: {e}") from e
        
        call_info = self._parse_call(result)
        logger.info(f"Listen URL: {call_info.listen_url}")
        logger.info(f"Control URL: {call_info.control_url}")
        return call_info
    
    @staticmethod
    def _parse_call(result: Dict[str, Any]) -> CallInfo:
        monitor = result.get("monitor") if isinstance(result, dict) else None
        if not isinstance(monitor, dict):
            raise CallSetupError("VAPI response has no monitor section")
        
        listen_url = monitor.get("listenUrl")
        control_url = monitor.get("controlUrl")
        if not listen_url or not control_url:
            raise CallSetupError("VAPI response is missing listenUrl or controlUrl")
        
        return CallInfo(
            listen_url=listen_url,
            control_url=control_url,
            call_id=result.get("id"),
        )
    
    async def say(self, control_url: str, message: str) -> None:
        """Make the assistant speak a message in the live call.
        
        Args:
            control_url: Control URL returned by initiate_call
            message: Text for the assistant to say
            
        Raises:
            ControlRequestError: If the control endpoint rejects the command
        """
        logger.info("Injecting message into the call...")
        data = {
            "type": "say",
            "message": message
        }
        
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(control_url, json=data) as response:
                    if response.status >= 300:
                        error_text = await response.text()
                        raise ControlRequestError(
                            f"Error injecting message: {response.status} - {error_text}"
                        )
        except aiohttp.ClientError as e:
            raise ControlRequestError(f"Error injecting message: {e}") from e
        
        logger.info(f'Assistant said: "{message}"')
