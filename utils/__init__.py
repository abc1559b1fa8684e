"""Shared request, auth and security helpers."""
