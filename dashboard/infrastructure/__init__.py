"""Infrastructure Layer — database, store, identity provider, logging, view cache.

Invariants:
    - Only this layer (and services/) performs IO
    - Implements the Protocols declared in core/repository_protocols.py
"""
