"""HTTP API for terrain synthesis."""
