"""Core search components."""
