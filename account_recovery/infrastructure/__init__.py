"""Infrastructure layer - adapters for the domain protocols."""
