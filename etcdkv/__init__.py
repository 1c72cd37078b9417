"""
etcdkv: blocking client for the etcd v1 HTTP key-value API.
"""

from etcdkv.core.models import Endpoint, Success, Failure, StoreResult
from etcdkv.adapters.etcd.client import EtcdClient
from etcdkv.settings import Settings

__all__ = ["Endpoint", "Success", "Failure", "StoreResult", "EtcdClient", "Settings"]
