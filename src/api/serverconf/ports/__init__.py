"""Ports for the server configuration context."""

from serverconf.ports.directory import GlobalGroupInfo, IGlobalConfDirectory, MemberInfo
from serverconf.ports.repositories import IClientRepository, IIdentifierRepository

__all__ = [
    "GlobalGroupInfo",
    "IClientRepository",
    "IGlobalConfDirectory",
    "IIdentifierRepository",
    "MemberInfo",
]
