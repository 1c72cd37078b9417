"""
Adapters for etcdkv.

This module contains the concrete implementations of port interfaces
that handle the HTTP transport to the store.
"""

from .etcd import EtcdClient, HttpTransport, TransportError

__all__ = ["EtcdClient", "HttpTransport", "TransportError"]
