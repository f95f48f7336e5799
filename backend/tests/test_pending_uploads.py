import pytest

from ruru_nft.models.nft_models import NFTRecord
from ruru_nft.services.pending_uploads import PendingUploadRegistry


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return PendingUploadRegistry(ttl=30, clock=clock)


@pytest.fixture
def record():
    return NFTRecord(
        publicKey="wallet",
        title="Kiwi",
        symbol="KIWI",
        description="bird",
        image="https://gateway.test/ipfs/QmImage",
        author="Aroha",
        royalty=5,
        price=1.25,
        tags="bird",
        metaData="https://gateway.test/ipfs/QmMeta",
    )


def test_each_upload_gets_its_own_entry(registry, record):
    first = registry.add(record, "img-1", "meta-1")
    second = registry.add(record, "img-2", "meta-2")

    assert first.upload_id != second.upload_id
    assert len(registry) == 2
    assert registry.pop(first.upload_id).image_url == "img-1"
    assert registry.pop(second.upload_id).image_url == "img-2"


def test_pop_consumes_entry(registry, record):
    entry = registry.add(record, "img", "meta")

    assert registry.pop(entry.upload_id) is entry
    assert registry.pop(entry.upload_id) is None


def test_unknown_id_returns_none(registry):
    assert registry.pop("does-not-exist") is None


def test_entries_expire_after_ttl(registry, record, clock):
    entry = registry.add(record, "img", "meta")

    clock.now += 30
    assert len(registry) == 1

    clock.now += 1
    assert registry.pop(entry.upload_id) is None
    assert len(registry) == 0


def test_restore_keeps_original_age(registry, record, clock):
    entry = registry.add(record, "img", "meta")
    registry.pop(entry.upload_id)

    clock.now += 20
    registry.restore(entry)
    assert registry.pop(entry.upload_id) is entry

    registry.restore(entry)
    clock.now += 11
    assert registry.pop(entry.upload_id) is None
