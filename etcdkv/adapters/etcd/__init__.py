from .client import EtcdClient
from .transport import HttpTransport, HttpResponse, TransportError

__all__ = ["EtcdClient", "HttpTransport", "HttpResponse", "TransportError"]
