"""Namespace for JSON-RPC support; it holds no modules at present."""

__all__: list[str] = []