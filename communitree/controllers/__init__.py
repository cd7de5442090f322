"""Flows that combine the store with external services."""
