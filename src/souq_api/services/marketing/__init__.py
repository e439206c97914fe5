"""AI-assisted marketing copy workflows."""
