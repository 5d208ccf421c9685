"""Riot API access."""

from riot.client import RiotClient, create_http_client

__all__ = ["RiotClient", "create_http_client"]
