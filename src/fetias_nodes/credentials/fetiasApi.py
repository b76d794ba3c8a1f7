"""
FETIAS API credential.

The API key is sent in the Authorization header behind the configured
token prefix ("fsk <apiKey>").
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


class FetiasApiCredential(BaseCredential):
    """FETIAS API credential implementation"""

    name = "fetiasApi"
    display_name = "FETIAS API"
    documentation_url = "fetias"
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

    def test(self) -> Dict[str, Any]:
        """
        Test the API key by reading the profile of its owner.
        """
        validation = self.validate()
        if not validation["valid"]:
            return {"success": False, "message": validation["message"]}

        descriptor = RequestDescriptor(
            method="GET",
            url=f"{self.settings.fetias_base_url}/profile",
            headers={"Authorization": f"{self.settings.fetias_auth_prefix} {self.data['apiKey']}"},
        )
        try:
            HttpClient(timeout=10).send(descriptor)
        except NodeTimeoutError:
            return {"success": False, "message": "Connection timeout"}
        except HttpApiError as e:
            if e.status_code in (401, 403):
                return {"success": False, "message": "Invalid API key - authentication failed"}
            return {"success": False, "message": f"FETIAS API error: {e}"}

        return {"success": True, "message": "Successfully connected to FETIAS API"}
