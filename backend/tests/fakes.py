"""
In-memory stand-in for the parts of the Firestore client the services use.

Documents are stored by full path ("userdata/u1/watchlist/e1") in insertion
order, which plays the role of the store's natural order.
"""
import uuid
from typing import Any

from google.api_core.exceptions import NotFound, ServiceUnavailable


class FakeSnapshot:
    def __init__(self, reference: "FakeDocumentReference", data: dict | None) -> None:
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict | None:
        return dict(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, db: "FakeFirestore", path: str) -> None:
        self._db = db
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def collection(self, name: str) -> "FakeCollection":
        return FakeCollection(self._db, f"{self.path}/{name}")

    def get(self) -> FakeSnapshot:
        self._db.check()
        return FakeSnapshot(self, self._db.docs.get(self.path))

    def set(self, data: dict) -> None:
        self._db.check()
        self._db.docs[self.path] = dict(data)

    def update(self, data: dict) -> None:
        self._db.check()
        if self.path not in self._db.docs:
            raise NotFound(f"No document to update: {self.path}")
        self._db.docs[self.path].update(data)

    def delete(self) -> None:
        self._db.check()
        self._db.docs.pop(self.path, None)


class FakeQuery:
    def __init__(self, collection: "FakeCollection", filters=(), limit: int | None = None) -> None:
        self._collection = collection
        self._filters = list(filters)
        self._limit = limit

    def where(self, filter) -> "FakeQuery":
        return FakeQuery(self._collection, [*self._filters, filter], self._limit)

    def limit(self, count: int) -> "FakeQuery":
        return FakeQuery(self._collection, self._filters, count)

    def _matches(self, data: dict) -> bool:
        for flt in self._filters:
            value = data.get(flt.field_path)
            if flt.op_string == "array_contains":
                if not isinstance(value, list) or flt.value not in value:
                    return False
            elif flt.op_string == "==":
                if value != flt.value:
                    return False
            else:
                raise NotImplementedError(flt.op_string)
        return True

    def stream(self):
        db = self._collection._db
        db.check()
        prefix = self._collection.path + "/"
        results = []
        for path, data in list(db.docs.items()):
            if not path.startswith(prefix) or "/" in path[len(prefix):]:
                continue
            if self._matches(data):
                results.append(FakeSnapshot(FakeDocumentReference(db, path), data))
        if self._limit is not None:
            results = results[: self._limit]
        return iter(results)


class FakeCollection(FakeQuery):
    def __init__(self, db: "FakeFirestore", path: str) -> None:
        self._db = db
        self.path = path
        super().__init__(self)

    def document(self, document_id: str | None = None) -> FakeDocumentReference:
        if document_id is None:
            document_id = uuid.uuid4().hex[:20]
        if not document_id or "/" in document_id:
            raise ValueError(f"Invalid document id {document_id!r}")
        return FakeDocumentReference(self._db, f"{self.path}/{document_id}")

    def add(self, data: dict) -> tuple[None, FakeDocumentReference]:
        ref = self.document()
        ref.set(data)
        return None, ref


class FakeBatch:
    def __init__(self, db: "FakeFirestore") -> None:
        self._db = db
        self._ops: list[tuple[str, FakeDocumentReference, dict | None]] = []

    def set(self, ref: FakeDocumentReference, data: dict) -> None:
        self._ops.append(("set", ref, dict(data)))

    def delete(self, ref: FakeDocumentReference) -> None:
        self._ops.append(("delete", ref, None))

    def commit(self) -> None:
        self._db.commits += 1
        if self._db.fail_commit:
            raise ServiceUnavailable("commit failed")
        self._db.check()
        for op, ref, data in self._ops:
            if op == "set":
                self._db.docs[ref.path] = data
            else:
                self._db.docs.pop(ref.path, None)


class FakeFirestore:
    def __init__(self, docs: dict[str, dict[str, Any]] | None = None) -> None:
        self.docs: dict[str, dict[str, Any]] = dict(docs or {})
        self.fail_with: Exception | None = None
        self.fail_commit = False
        self.commits = 0
        self.get_all_calls: list[list[str]] = []

    def check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def get_all(self, references):
        self.check()
        references = list(references)
        self.get_all_calls.append([ref.path for ref in references])
        # Real batched reads do not preserve request order
        return [FakeSnapshot(ref, self.docs.get(ref.path)) for ref in reversed(references)]

    def batch(self) -> FakeBatch:
        return FakeBatch(self)

    def paths(self, prefix: str) -> list[str]:
        return [path for path in self.docs if path.startswith(prefix)]


def catalog_docs() -> dict[str, dict[str, Any]]:
    return {
        "categories/c1": {"title": "Action", "filter": "action", "order": 1},
        "categories/c2": {"title": "Drama", "filter": "drama"},
        "movies/m1": {
            "title": "Heat",
            "description": "Cops and robbers",
            "image": "heat.jpg",
            "video": "heat.mp4",
            "categories": ["action", "drama"],
        },
        "movies/m2": {
            "title": "Amadeus",
            "description": "Mozart",
            "image": "amadeus.jpg",
            "video": "amadeus.mp4",
            "categories": ["drama"],
        },
        "movies/m3": {
            "title": "Speed",
            "description": "Bus",
            "image": "speed.jpg",
            "video": "speed.mp4",
            "categories": ["action"],
        },
    }
