"""Ports for the connectors bounded context."""
