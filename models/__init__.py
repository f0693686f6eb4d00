"""Example SSE model plugins."""
