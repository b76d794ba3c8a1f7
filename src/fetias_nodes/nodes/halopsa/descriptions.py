"""
Resource-specific parameters of the HaloPSA node.
"""

ticket_description = [
    {
        "displayName": "Summary",
        "name": "summary",
        "type": "string",
        "default": "",
        "required": True,
        "displayOptions": {"show": {"resource": ["tickets"], "operation": ["create"]}},
    },
    {
        "displayName": "Details",
        "name": "details",
        "type": "string",
        "default": "",
        "required": True,
        "displayOptions": {"show": {"resource": ["tickets"], "operation": ["create"]}},
    },
]

invoice_description = [
    {
        "displayName": "Invoice Date",
        "name": "invoiceDate",
        "type": "dateTime",
        "default": "",
        "required": True,
        "displayOptions": {"show": {"resource": ["invoice"], "operation": ["create"]}},
    },
]

user_description = [
    {
        "displayName": "User Name",
        "name": "userName",
        "type": "string",
        "default": "",
        "required": True,
        "displayOptions": {"show": {"resource": ["users"], "operation": ["create"]}},
    },
]

client_description = [
    {
        "displayName": "Client Name",
        "name": "clientName",
        "type": "string",
        "default": "",
        "required": True,
        "displayOptions": {"show": {"resource": ["client"], "operation": ["create"]}},
    },
    {
        "displayName": "Is VIP",
        "name": "clientIsVip",
        "type": "boolean",
        "default": False,
        "displayOptions": {"show": {"resource": ["client"], "operation": ["create"]}},
    },
    {
        "displayName": "Reference",
        "name": "clientRef",
        "type": "string",
        "default": "",
        "displayOptions": {"show": {"resource": ["client"], "operation": ["create"]}},
    },
]

site_description = [
    {
        "displayName": "Site Name",
        "name": "siteName",
        "type": "string",
        "default": "",
        "required": True,
        "displayOptions": {"show": {"resource": ["site"], "operation": ["create"]}},
    },
]
