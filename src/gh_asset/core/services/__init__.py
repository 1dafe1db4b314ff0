"""Application services (orchestration over core + adapters)."""
