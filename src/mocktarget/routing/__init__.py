"""Routing: compiled route table with exact and prefix matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""
