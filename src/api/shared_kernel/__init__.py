"""Shared kernel: the small set of types every layer may depend on.

Currently the request-scoped observation context bound to domain probes.
"""
