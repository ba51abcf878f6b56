"""Adapters: config parsers and IO implementations of the ports."""
