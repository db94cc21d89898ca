"""Infrastructure layer: ast analyzers and adapters."""
