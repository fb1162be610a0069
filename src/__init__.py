"""PCP Tracker: production control and planning service."""
