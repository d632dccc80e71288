"""Read-side query modules (one per aggregate)."""
