"""Domain-level registries and value types."""
