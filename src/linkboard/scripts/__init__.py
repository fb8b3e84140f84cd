"""Operational scripts (migrations, maintenance sweeps)."""
