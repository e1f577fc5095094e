"""Acme Dashboard Package — validated mutation pipeline for invoices and team members.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
