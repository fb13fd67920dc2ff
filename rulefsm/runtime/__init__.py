"""Guard evaluation engines."""
