"""Domain layer for the server configuration context.

Pure business objects: X-Road identities and the Client aggregate. No
infrastructure or framework imports.
"""
