import json

from taostake.api.schemas import PaginationParams, ProviderFilter, ProviderQueryOptions
from taostake.api.sources.memory import InMemoryProviderSource


def _ids(items):
    return [p.provider for p in items]


def test_find_many_orders_featured_then_locked(memory_source, addresses):
    out = memory_source.find_many(ProviderFilter(), ProviderQueryOptions())
    assert _ids(out) == [addresses["featured"], addresses["empty"], addresses["plain"]]


def test_find_many_filters_combine(memory_source, addresses):
    opts = ProviderQueryOptions()

    by_owner = memory_source.find_many(ProviderFilter(owner=addresses["owner"]), opts)
    assert _ids(by_owner) == [addresses["featured"], addresses["plain"]]

    by_identity = memory_source.find_many(ProviderFilter(identity="plain-id"), opts)
    assert _ids(by_identity) == [addresses["plain"]]

    subset = memory_source.find_many(
        ProviderFilter(owner=addresses["owner"], providers=[addresses["plain"], addresses["empty"]]),
        opts,
    )
    assert _ids(subset) == [addresses["plain"]]

    assert memory_source.find_many(ProviderFilter(identity="nobody"), opts) == []


def test_find_many_strips_identity_info_unless_requested(memory_source, addresses):
    flt = ProviderFilter(providers=[addresses["featured"]])

    plain = memory_source.find_many(flt, ProviderQueryOptions())
    assert plain[0].identity_info is None

    rich = memory_source.find_many(flt, ProviderQueryOptions(with_identity_info=True))
    assert rich[0].identity_info is not None
    assert rich[0].identity_info.name == "Featured"

    # Stripping must not mutate the stored snapshot.
    assert memory_source.find_one(addresses["featured"]).identity_info is not None


def test_avatar_url(memory_source, addresses):
    assert memory_source.avatar_url(addresses["featured"]) == "https://example.org/featured.png"
    assert memory_source.avatar_url(addresses["empty"]) is None
    assert memory_source.avatar_url(addresses["plain"]) is None
    assert memory_source.avatar_url(addresses["unknown"]) is None


def test_delegators_sorted_and_windowed(memory_source, addresses):
    page = memory_source.delegators(addresses["featured"], PaginationParams())
    assert [d.stake for d in page] == ["30", "20", "10"]

    window = memory_source.delegators(addresses["featured"], PaginationParams(from_=1, size=1))
    assert [d.address for d in window] == [addresses["delegator_c"]]

    assert memory_source.delegators(addresses["featured"], PaginationParams(from_=10, size=5)) == []


def test_delegators_empty_vs_unknown(memory_source, addresses):
    assert memory_source.delegators(addresses["empty"], PaginationParams()) == []
    assert memory_source.delegators(addresses["unknown"], PaginationParams()) is None


def test_delegators_count(memory_source, addresses):
    assert memory_source.delegators_count(addresses["featured"]) == 3
    assert memory_source.delegators_count(addresses["empty"]) == 0
    assert memory_source.delegators_count(addresses["unknown"]) == 0


def test_from_json_file_reads_camel_case_snapshot(tmp_path, addresses):
    snapshot = {
        "providers": [
            {
                "provider": addresses["featured"],
                "owner": addresses["owner"],
                "numUsers": 1,
                "serviceFee": 0.1,
                "locked": "42",
                "identityInfo": {"identity": "x", "avatar": "https://example.org/x.png"},
            }
        ],
        "delegators": {
            addresses["featured"]: [{"address": addresses["delegator_a"], "stake": "42"}],
        },
    }
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot), encoding="utf-8")

    src = InMemoryProviderSource.from_json_file(path)
    p = src.find_one(addresses["featured"])
    assert p.num_users == 1
    assert p.service_fee == 0.1
    assert src.avatar_url(addresses["featured"]) == "https://example.org/x.png"
    assert src.delegators_count(addresses["featured"]) == 1
