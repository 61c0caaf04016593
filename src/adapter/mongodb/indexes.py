"""MongoDB index management.

Repositories declare their indexes as IndexSpec entries; ensure_all_indexes()
applies them at startup. An existing index that clashes with a spec, by
name or by key pattern, is dropped and rebuilt from the declaration.
"""

from dataclasses import dataclass, field
from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    keys: list
    name: str
    options: dict = field(default_factory=dict)


def _find_conflict(collection: Collection, spec: IndexSpec) -> str | None:
    wanted_keys = dict(spec.keys)
    for name, info in collection.index_information().items():
        if name == '_id_':
            continue
        if name == spec.name or dict(info.get('key', [])) == wanted_keys:
            return name
    return None


def create_index_safe(collection: Collection, spec: IndexSpec) -> bool:
    """Create one index, rebuilding a clashing one. Other errors propagate."""
    try:
        collection.create_index(spec.keys, name=spec.name, **spec.options)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise

    conflict = _find_conflict(collection, spec)
    if conflict is None:
        logger.error("Index conflict reported but no clashing index found", extra={"index": spec.name})
        return False

    logger.warning("Rebuilding conflicting index", extra={"dropped": conflict, "index": spec.name})
    collection.drop_index(conflict)
    collection.create_index(spec.keys, name=spec.name, **spec.options)
    return True


def ensure_collection_indexes(collection: Collection, specs) -> bool:
    try:
        return all([create_index_safe(collection, spec) for spec in specs])
    except PyMongoError as e:
        logger.error("Failed to create indexes", extra={
            "collection": collection.name, "error": str(e)
        })
        return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository
    from adapter.mongodb.session_repository import MongoSessionRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoSessionRepository(db).ensure_indexes(),
    ]
    return all(results)
