"""Domain layer: pure data types and path arithmetic, no I/O."""
