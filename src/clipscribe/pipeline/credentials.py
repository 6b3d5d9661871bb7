"""API key flow for the settings screen.

Independent of the workflow: failures go back to the caller and never
touch the state machine.
"""

from __future__ import annotations

from clipscribe.errors import InvalidApiKeyError
from clipscribe.gateway.base import BackendGateway
from clipscribe.utils.progress import log_error, log_success

MASK_PREFIX = "***"


def mask_api_key(api_key: str) -> str:
    """Show only the last four characters."""
    return MASK_PREFIX + api_key[-4:]


class ApiKeySettings:
    """Validate, store and display the backend API key."""

    def __init__(self, gateway: BackendGateway):
        self.gateway = gateway

    async def masked_hint(self) -> str | None:
        try:
            api_key = await self.gateway.get_api_key()
        except Exception as e:
            log_error(f"Failed to load API key: {e}")
            return None
        return mask_api_key(api_key) if api_key else None

    async def save(self, api_key: str) -> None:
        """Validate ``api_key`` with the backend and store it.

        Raises ``InvalidApiKeyError`` for empty or masked input and for keys
        the backend rejects; ``BackendError`` if the backend call fails.
        """
        if not api_key or api_key.startswith(MASK_PREFIX):
            raise InvalidApiKeyError("Please enter a valid API key")

        if not await self.gateway.validate_api_key(api_key):
            raise InvalidApiKeyError("Invalid API key. Please check and try again.")

        await self.gateway.save_api_key(api_key)
        log_success("API key saved")
