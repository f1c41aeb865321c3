import pytest

from models import RecordInput
from record_store import InMemoryRecordStore, RecordNotFound


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def stored(store):
    return store.create(RecordInput(caption="Sunday market with fresh bread", image_count=2))


def test_create_and_get(store, stored):
    fetched = store.get(stored.id)

    assert fetched.record.caption == "Sunday market with fresh bread"
    assert fetched.decorations is None
    assert fetched.recommended_layout is None


def test_update_only_given_fields(store, stored):
    store.update_decorations(stored.id, decorations='{"elements": []}', recommended_layout="collage")
    updated = store.update_decorations(stored.id, recommended_layout="magazine")

    assert updated.decorations == '{"elements": []}'
    assert updated.recommended_layout == "magazine"
    assert store.get(stored.id) == updated


def test_delete_removes_record_and_decorations(store, stored):
    store.update_decorations(stored.id, decorations='{"elements": []}')

    store.delete(stored.id)

    with pytest.raises(RecordNotFound):
        store.get(stored.id)


def test_unknown_record(store):
    with pytest.raises(RecordNotFound):
        store.get("missing")
    with pytest.raises(RecordNotFound):
        store.update_decorations("missing", decorations="{}")
    with pytest.raises(RecordNotFound):
        store.delete("missing")
