"""taostake: read-only API over Bittensor staking providers and their delegators."""

__version__ = "0.1.0"
