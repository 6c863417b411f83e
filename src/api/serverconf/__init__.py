"""Server configuration bounded context.

Manages the locally configured X-Road clients of a security server: their
services, endpoints, local groups and the access rights granted on them.
"""
