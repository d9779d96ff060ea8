"""Record store that materializes the bundled Pokédex dataset."""

from dexsearch.store.exceptions import EmptyFieldError, LoadError, MalformedDataError
from dexsearch.store.records import RecordStore, parse_records

__all__ = [
    "RecordStore",
    "parse_records",
    "LoadError",
    "MalformedDataError",
    "EmptyFieldError",
]
