"""Query-understanding app."""
