"""Domain layer: records, ports and the tracking reconciliation engine."""
