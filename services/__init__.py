"""Domain services operating on an explicitly supplied database session."""
