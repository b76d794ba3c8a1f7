"""
FriendGrid API credential (Bearer API key).
"""
from typing import Any, Dict, Optional

from fetias_nodes.config import Settings, get_settings
from fetias_nodes.node_sdk.http import (
    HttpApiError,
    HttpClient,
    NodeTimeoutError,
    RequestDescriptor,
)

from .base import BaseCredential


class FriendGridApiCredential(BaseCredential):
    """FriendGrid API credential implementation"""

    name = "friendGridApi"
    display_name = "FriendGrid API"
    properties = [
        {
            "name": "apiKey",
            "displayName": "API Key",
            "type": "string",
            "typeOptions": {"password": True},
            "default": "",
            "required": True,
        }
    ]

    def __init__(self, data: Dict[str, Any], settings: Optional[Settings] = None):
        super().__init__(data)
        self.settings = settings or get_settings()

    def get_auth_headers(self) -> Dict[str, str]:
        """Headers sent with every FriendGrid request."""
        api_key = self.data.get("apiKey")
        if not api_key:
            raise ValueError("API key not found in credentials")
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

    def test(self) -> Dict[str, Any]:
        validation = self.validate()
        if not validation["valid"]:
            return {"success": False, "message": validation["message"]}

        descriptor = RequestDescriptor(
            method="GET",
            url=f"{self.settings.friendgrid_base_url}/",
            headers=self.get_auth_headers(),
        )
        try:
            HttpClient(timeout=10).send(descriptor)
        except NodeTimeoutError:
            return {"success": False, "message": "Connection timeout"}
        except HttpApiError as e:
            return {"success": False, "message": f"FriendGrid API error: {e}"}

        return {"success": True, "message": "Successfully connected to FriendGrid API"}
