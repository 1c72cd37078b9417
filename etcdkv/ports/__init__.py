"""
Port interfaces for etcdkv.

This module defines the port interfaces (Protocols) that define
the contracts between callers and the store adapters.
"""

from .kvstore import KVStorePort

__all__ = ["KVStorePort"]
