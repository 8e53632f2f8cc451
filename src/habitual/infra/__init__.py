"""Infrastructure implementations of domain contracts."""
