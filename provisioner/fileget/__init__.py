from .cache import CacheStore, last_part
from .fetcher import ProxyAwareFetcher, RemoteStream, default_client_factory
from .proxies import ProxySelector

__all__ = [
    "CacheStore",
    "last_part",
    "ProxyAwareFetcher",
    "RemoteStream",
    "default_client_factory",
    "ProxySelector",
]
