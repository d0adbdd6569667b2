"""Route building, route tables, bindings and the two router strategies."""
