"""Infrastructure layer: hosted backend adapters implementing application ports."""
