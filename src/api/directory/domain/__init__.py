"""Directory domain: integrations, employees and groups."""
