"""Credential store implementations for bearer-token caching."""

from devbridge.remote.store.base import CredentialStore
from devbridge.remote.store.local import LocalCredentialStore

__all__ = ["CredentialStore", "LocalCredentialStore"]
