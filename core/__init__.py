"""Shared infrastructure: layered configuration and language dictionaries."""
