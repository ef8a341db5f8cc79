"""Read-only HTTP surface."""
