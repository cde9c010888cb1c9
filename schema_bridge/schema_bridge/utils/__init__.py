"""Small helpers shared across schema_bridge."""
