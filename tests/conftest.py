import sys
from pathlib import Path

# Ensure repo root is on sys.path so `import taostake` works under all pytest import modes.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import bittensor as bt  # noqa: E402
import pytest  # noqa: E402

from taostake.api.schemas import Provider, ProviderDelegator, ProviderIdentity  # noqa: E402
from taostake.api.sources.memory import InMemoryProviderSource  # noqa: E402


def ss58(seed_byte: int) -> str:
    return bt.Keypair.create_from_seed(f"{seed_byte:02x}" * 32).ss58_address


@pytest.fixture(scope="session")
def addresses():
    # featured provider, plain provider, provider without delegators, owner, delegators, unknown
    return {
        "featured": ss58(1),
        "plain": ss58(2),
        "empty": ss58(3),
        "owner": ss58(4),
        "delegator_a": ss58(5),
        "delegator_b": ss58(6),
        "delegator_c": ss58(7),
        "unknown": ss58(8),
    }


@pytest.fixture
def providers(addresses):
    return [
        Provider(
            provider=addresses["plain"],
            owner=addresses["owner"],
            stake="500",
            locked="900",
            num_users=1,
            identity="plain-id",
        ),
        Provider(
            provider=addresses["featured"],
            owner=addresses["owner"],
            featured=True,
            stake="100",
            locked="100",
            num_users=3,
            identity="featured-id",
            identity_info=ProviderIdentity(
                identity="featured-id",
                name="Featured",
                avatar="https://example.org/featured.png",
            ),
        ),
        Provider(
            provider=addresses["empty"],
            stake="0",
            locked="2000",
            identity="empty-id",
            identity_info=ProviderIdentity(identity="empty-id", name="No avatar"),
        ),
    ]


@pytest.fixture
def memory_source(addresses, providers):
    return InMemoryProviderSource(
        providers,
        {
            addresses["featured"]: [
                ProviderDelegator(address=addresses["delegator_a"], stake="10"),
                ProviderDelegator(address=addresses["delegator_b"], stake="30"),
                ProviderDelegator(address=addresses["delegator_c"], stake="20"),
            ],
            addresses["plain"]: [
                ProviderDelegator(address=addresses["delegator_a"], stake="5"),
            ],
        },
    )
