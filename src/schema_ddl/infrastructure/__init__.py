"""Infrastructure layer: schema model, SQL generation and cache identity."""
