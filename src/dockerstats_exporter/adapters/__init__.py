"""Adapters connecting the core to storage, docker and HTTP."""
