"""
Field assembly for HaloPSA create requests.

RESOURCE_FIELDS maps each resource to a function that reads that
resource's parameters and returns a validated payload fragment.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict


class HaloPSAResource(str, Enum):
    CLIENT = "client"
    INVOICE = "invoice"
    SITE = "site"
    TICKETS = "tickets"
    USERS = "users"


# Reads one parameter for the item being processed: (name, default) -> value
ParameterGetter = Callable[[str, Any], Any]


class TicketFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    summary: str
    details: str


class ClientFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    is_vip: bool = False
    ref: str = ""
    website: Optional[Union[int, str]] = None


class UserFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    site_id: Optional[Union[int, str]] = None


class SiteFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    client_id: Optional[Union[int, str]] = None


class InvoiceFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_id: Optional[Union[int, str]] = None
    invoice_date: str


def ticket_fields(get: ParameterGetter) -> Dict[str, Any]:
    return TicketFields(summary=get("summary", ""), details=get("details", "")).model_dump(exclude_none=True)


def client_fields(get: ParameterGetter) -> Dict[str, Any]:
    return ClientFields(
        name=get("clientName", ""),
        is_vip=get("clientIsVip", False),
        ref=get("clientRef", ""),
        website=get("sitesList", None) or None,
    ).model_dump(exclude_none=True)


def user_fields(get: ParameterGetter) -> Dict[str, Any]:
    return UserFields(name=get("userName", ""), site_id=get("sitesList", None) or None).model_dump(exclude_none=True)


def site_fields(get: ParameterGetter) -> Dict[str, Any]:
    return SiteFields(name=get("siteName", ""), client_id=get("clientsList", None) or None).model_dump(exclude_none=True)


def invoice_fields(get: ParameterGetter) -> Dict[str, Any]:
    return InvoiceFields(
        client_id=get("clientsList", None) or None,
        invoice_date=str(get("invoiceDate", "")),
    ).model_dump(exclude_none=True)


RESOURCE_FIELDS: Dict[HaloPSAResource, Callable[[ParameterGetter], Dict[str, Any]]] = {
    HaloPSAResource.TICKETS: ticket_fields,
    HaloPSAResource.CLIENT: client_fields,
    HaloPSAResource.USERS: user_fields,
    HaloPSAResource.SITE: site_fields,
    HaloPSAResource.INVOICE: invoice_fields,
}


def process_fields(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Flatten the "Add Field" collection into a payload dict.

    {"fields": [{"fieldName": "a", "fieldValue": "1"}]} -> {"a": "1"}
    """
    fields = (data or {}).get("fields") or []
    if isinstance(fields, dict):
        fields = [fields]
    return {
        field["fieldName"]: field.get("fieldValue")
        for field in fields
        if field.get("fieldName")
    }


__all__ = [
    "HaloPSAResource",
    "RESOURCE_FIELDS",
    "process_fields",
]
