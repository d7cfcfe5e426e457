"""Typed client for the Ethereum JSON-RPC interface over a pluggable transport."""

__version__ = "0.1.0"