"""
Data Collections - Named lists of game data loaded on demand.

A data collection holds, per name, a list of records with an `id`
(creature species, skills, items...). The load function fills one
collection at a time; lookups fall back to the `UNDEF_DATA_ID` record,
then to the first record, so games always get some data back.
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


UNDEF_DATA_ID = "__undef__"


class EmptyCollectionError(LookupError):
    """Raised when reading from a collection that holds no data."""

    def __init__(self, collection_name: str):
        self.collection_name = collection_name
        super().__init__("Empty collection, cannot load data")


@dataclass
class DataCollection:
    data_load_function: Callable[[str], list[Any]]
    collections: dict[str, list[Any]]


def create_data_collection(
    data_load_function: Callable[[str], list[Any]],
    default_collections_state: dict[str, list[Any]],
) -> DataCollection:
    return DataCollection(
        data_load_function=data_load_function,
        collections=default_collections_state,
    )


def load_data_collection(data_collection: DataCollection, collection_name: str):
    """(Re)load one collection with the load function."""
    data_collection.collections[collection_name] = data_collection.data_load_function(collection_name)


def _data_id(data: Any) -> Any:
    if isinstance(data, dict):
        return data.get("id")
    return getattr(data, "id", None)


def get_data_from_data_collection(
    data_collection: DataCollection,
    collection_name: str,
    data_id: str,
) -> Any:
    """Get a record by id, falling back to the undefined record, then to the first one."""
    collection = data_collection.collections[collection_name]
    if not collection:
        raise EmptyCollectionError(collection_name)

    by_id = {}
    for data in collection:
        by_id.setdefault(_data_id(data), data)

    if data_id in by_id:
        return by_id[data_id]
    return by_id.get(UNDEF_DATA_ID, collection[0])
