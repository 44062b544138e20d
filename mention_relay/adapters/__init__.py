"""Adapters — concrete implementations of the port interfaces."""
