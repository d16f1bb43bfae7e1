"""HTTP utilities package.

Exposes pooled httpx clients and the JSON request adapter used by probes and
geo lookups.
"""

from .client import get_httpx_client, close_all_clients
from .json_client import HttpxJsonClient
from .reply import HttpReply

__all__ = ["get_httpx_client", "close_all_clients", "HttpxJsonClient", "HttpReply"]
