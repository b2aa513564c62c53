"""Study Desk HTTP API."""
