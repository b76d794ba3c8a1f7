"""
Credentials package.
Each credential type has its own file with definition and testing capabilities.
"""
from typing import Dict, Type

from .base import BaseCredential
from .fetiasApi import FetiasApiCredential
from .friendGridApi import FriendGridApiCredential
from .haloPSAApi import HaloPSAApiCredential

# Credential types used by the nodes of this package
CREDENTIAL_TYPES: Dict[str, Type[BaseCredential]] = {
    cred_class.name: cred_class
    for cred_class in (FetiasApiCredential, FriendGridApiCredential, HaloPSAApiCredential)
}


__all__ = [
    "BaseCredential",
    "CREDENTIAL_TYPES",
    "FetiasApiCredential",
    "FriendGridApiCredential",
    "HaloPSAApiCredential",
]
