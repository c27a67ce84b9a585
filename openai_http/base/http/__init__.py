"""HTTP glue public surface."""

from .client import ServiceClient, encode_body, join_url

__all__ = ["ServiceClient", "encode_body", "join_url"]
