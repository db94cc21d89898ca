"""Application layer: expander service and reporters."""
