"""HTTP API for the KU-KEY core."""
