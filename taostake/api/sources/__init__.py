from taostake.api.sources.base import ProviderSource
from taostake.api.sources.memory import InMemoryProviderSource
from taostake.api.sources.remote import RemoteProviderSource

__all__ = ["ProviderSource", "InMemoryProviderSource", "RemoteProviderSource"]
