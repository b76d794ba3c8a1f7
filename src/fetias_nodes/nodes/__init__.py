"""
Integration nodes.

- FETIAS: activity form entries and profile (fetiasApi)
- FriendGrid: contacts (friendGridApi)
- HaloPSA: clients, invoices, sites, tickets, users (haloPSAApi)
"""

from .fetias import FetiasNode
from .friendgrid import FriendGridNode
from .halopsa import HaloPSANode

__all__ = ["FetiasNode", "FriendGridNode", "HaloPSANode"]
