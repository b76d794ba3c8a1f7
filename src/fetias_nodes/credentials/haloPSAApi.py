"""
HaloPSA API credential.

HaloPSA uses the OAuth2 client-credentials grant: the client id and
secret are exchanged at ``{authUrl}/token`` for a bearer token that is
then sent to ``resourceApiUrl``. Hosted tenants pass their tenant name
as a query parameter on the token call.
"""
from typing import Any, Dict

from fetias_nodes.node_sdk.http import (
    HttpApiError,
    HttpClient,
    NodeTimeoutError,
    RequestDescriptor,
)

from .base import BaseCredential

DEFAULT_SCOPE = "admin edit:tickets edit:customers"


class HaloPSAApiCredential(BaseCredential):
    """HaloPSA API credential implementation"""

    name = "haloPSAApi"
    display_name = "HaloPSA API"
    documentation_url = "haloPSA"
    properties = [
        {
            "name": "hostingType",
            "displayName": "Hosting Type",
            "type": "options",
            "options": [
                {"name": "On-Premise Solution", "value": "onPremise"},
                {"name": "Hosted Solution Of Halo", "value": "hostedHalo"},
            ],
            "default": "onPremise",
        },
        {
            "name": "authUrl",
            "displayName": "Authorisation Server URL",
            "type": "string",
            "default": "",
            "required": True,
        },
        {
            "name": "resourceApiUrl",
            "displayName": "Resource Server",
            "type": "string",
            "default": "",
            "required": True,
        },
        {
            "name": "client_id",
            "displayName": "Client ID",
            "type": "string",
            "default": "",
            "required": True,
            "description": "Must be your application client ID",
        },
        {
            "name": "client_secret",
            "displayName": "Client Secret",
            "type": "string",
            "typeOptions": {"password": True},
            "default": "",
            "required": True,
            "description": "Must be your application client secret",
        },
        {
            "name": "tenant",
            "displayName": "Tenant",
            "type": "string",
            "default": "",
            "displayOptions": {"show": {"hostingType": ["hostedHalo"]}},
            "description": "An API key for the hosted solution",
        },
        {
            "name": "scope",
            "displayName": "Application's Permissions",
            "type": "string",
            "default": DEFAULT_SCOPE,
            "description": "Must be the same as in your HaloPSA application",
        },
    ]

    @property
    def resource_api_url(self) -> str:
        return str(self.data.get("resourceApiUrl", "")).rstrip("/")

    def get_token_request(self) -> RequestDescriptor:
        """Build the client-credentials token request."""
        qs: Dict[str, Any] = {}
        if self.data.get("hostingType") == "hostedHalo":
            qs["tenant"] = self.data.get("tenant", "")

        return RequestDescriptor(
            method="POST",
            url=f"{str(self.data.get('authUrl', '')).rstrip('/')}/token",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            form={
                "client_id": self.data.get("client_id"),
                "client_secret": self.data.get("client_secret"),
                "grant_type": "client_credentials",
                "scope": self.data.get("scope") or DEFAULT_SCOPE,
            },
            qs=qs,
        )

    def test(self) -> Dict[str, Any]:
        """
        Test the credential by requesting an access token.
        """
        validation = self.validate()
        if not validation["valid"]:
            return {"success": False, "message": validation["message"]}

        try:
            tokens = HttpClient(timeout=10).send(self.get_token_request())
        except NodeTimeoutError:
            return {"success": False, "message": "Connection timeout"}
        except HttpApiError:
            return {"success": False, "message": "The API Key included in the request is invalid"}

        if not isinstance(tokens, dict) or not tokens.get("access_token"):
            return {"success": False, "message": "Token response did not contain an access token"}

        return {"success": True, "message": "Connection successful!"}
