from .node import FriendGridNode

__all__ = ["FriendGridNode"]
