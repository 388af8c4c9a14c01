"""Hotel audit access-control service."""
