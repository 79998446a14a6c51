"""Export scenes to standalone files."""
