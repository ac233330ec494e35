"""Endpoint modules, one per group of the bridge's REST surface."""
