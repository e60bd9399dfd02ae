"""API routers included by server.py."""
