"""Request pipeline: ASGI handling, negotiation, errors, and server launchers."""
