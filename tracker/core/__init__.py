"""
Core utilities shared across the tracker API.

This package hosts configuration (env vars, storage selection), the error
taxonomy used by services/repositories and the logging setup. Routers and
services depend on these primitives instead of reading os.environ directly.
"""
