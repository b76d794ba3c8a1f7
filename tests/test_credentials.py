"""Tests for credential types."""
from unittest.mock import patch

import pytest
import requests

from fetias_nodes.config import Settings
from fetias_nodes.credentials import (
    CREDENTIAL_TYPES,
    FetiasApiCredential,
    FriendGridApiCredential,
    HaloPSAApiCredential,
)
from fetias_nodes.credentials.base import BaseCredential


class TestCredentialTypes:
    """Credential type lookup."""

    def test_lookup(self):
        assert list(CREDENTIAL_TYPES) == ["fetiasApi", "friendGridApi", "haloPSAApi"]
        assert CREDENTIAL_TYPES["haloPSAApi"] is HaloPSAApiCredential

    def test_base_credential_is_abstract(self):
        with pytest.raises(TypeError):
            BaseCredential({})


class TestFetiasApiCredential:
    """fetiasApi credential."""

    def test_validate_missing_key(self):
        assert FetiasApiCredential({}).validate() == {
            "valid": False,
            "message": "Missing required fields: apiKey",
        }

    @patch("requests.request")
    def test_connection_ok(self, mock_request, make_response):
        mock_request.return_value = make_response(200, {"username": "alice"})
        settings = Settings(fetias_auth_prefix="fsk")

        result = FetiasApiCredential({"apiKey": "abc"}, settings=settings).test()

        assert result["success"] is True
        kwargs = mock_request.call_args.kwargs
        assert kwargs["url"] == "https://app01.fetias.com/api/profile"
        assert kwargs["headers"] == {"Authorization": "fsk abc"}

    @patch("requests.request")
    def test_rejected_key(self, mock_request, make_response):
        mock_request.return_value = make_response(401, {"message": "bad key"})

        result = FetiasApiCredential({"apiKey": "abc"}).test()

        assert result == {"success": False, "message": "Invalid API key - authentication failed"}

    @patch("requests.request")
    def test_timeout(self, mock_request):
        mock_request.side_effect = requests.exceptions.Timeout()

        result = FetiasApiCredential({"apiKey": "abc"}).test()

        assert result == {"success": False, "message": "Connection timeout"}


class TestFriendGridApiCredential:
    """friendGridApi credential."""

    def test_auth_headers(self):
        headers = FriendGridApiCredential({"apiKey": "fg"}).get_auth_headers()

        assert headers == {"Accept": "application/json", "Authorization": "Bearer fg"}

    def test_auth_headers_without_key(self):
        with pytest.raises(ValueError):
            FriendGridApiCredential({}).get_auth_headers()

    @patch("requests.request")
    def test_connection_error(self, mock_request, make_response):
        mock_request.return_value = make_response(500, {"message": "down"})

        result = FriendGridApiCredential({"apiKey": "fg"}).test()

        assert result["success"] is False
        assert "500 - down" in result["message"]


class TestHaloPSAApiCredential:
    """haloPSAApi credential."""

    def test_token_request_on_premise(self, halopsa_credentials):
        descriptor = HaloPSAApiCredential(halopsa_credentials).get_token_request()

        assert descriptor.url == "https://halo.test/auth/token"
        assert descriptor.qs == {}
        assert descriptor.form["grant_type"] == "client_credentials"
        assert descriptor.headers == {"Content-Type": "application/x-www-form-urlencoded"}

    def test_token_request_default_scope(self, halopsa_credentials):
        data = dict(halopsa_credentials, scope="")

        descriptor = HaloPSAApiCredential(data).get_token_request()

        assert descriptor.form["scope"] == "admin edit:tickets edit:customers"

    def test_resource_api_url_is_trimmed(self, halopsa_credentials):
        data = dict(halopsa_credentials, resourceApiUrl="https://halo.test/api/")

        assert HaloPSAApiCredential(data).resource_api_url == "https://halo.test/api"

    def test_missing_fields(self):
        result = HaloPSAApiCredential({"authUrl": "https://halo.test/auth"}).test()

        assert result["success"] is False
        assert "client_id" in result["message"]
