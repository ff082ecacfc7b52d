import pytest


class FakeDocRef:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id


class FakeSnapshot:
    def __init__(self, reference):
        self.reference = reference
        self.id = reference.id


class FakeCollection:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def stream(self):
        self.db.calls.append(("stream", self.name))
        if self.name in self.db.stream_errors:
            raise self.db.stream_errors[self.name]
        return iter([FakeSnapshot(FakeDocRef(self.name, d)) for d in self.db.docs.get(self.name, [])])


class FakeBatch:
    def __init__(self, db):
        self.db = db
        self.deletes = []
        self.committed = False

    def delete(self, ref):
        self.deletes.append(ref)

    def commit(self):
        names = {ref.collection for ref in self.deletes}
        for name in names:
            if name in self.db.commit_errors:
                raise self.db.commit_errors[name]
        for ref in self.deletes:
            self.db.docs[ref.collection].remove(ref.id)
        self.committed = True


class FakeFirestore:
    """In-memory stand-in for the handful of client calls the eraser makes."""

    def __init__(self, docs=None):
        self.docs = {name: list(ids) for name, ids in (docs or {}).items()}
        self.stream_errors = {}
        self.commit_errors = {}
        self.batches = []
        self.calls = []

    def collection(self, name):
        return FakeCollection(self, name)

    def batch(self):
        batch = FakeBatch(self)
        self.batches.append(batch)
        return batch


@pytest.fixture
def fake_db():
    return FakeFirestore()
