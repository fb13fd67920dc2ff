"""Core rule set, transition and machine types."""
