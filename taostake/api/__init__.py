"""Provider read-API.

A small FastAPI service over staking providers (delegate hotkeys) and their
delegators. Request parameters are validated by `taostake.api.params`,
resolved by `ProviderQueryResolver`, and served from a `ProviderSource`:
- `InMemoryProviderSource`: a JSON snapshot loaded at startup
- `RemoteProviderSource`: an upstream provider API over HTTP
"""
