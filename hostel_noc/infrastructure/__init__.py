"""Infrastructure layer: port implementations and observability."""
