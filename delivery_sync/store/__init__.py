"""
Remote store access: the ``RecordStore`` interface, its REST backend and the
synchronizer that drives a full replace.
"""

from .base import RecordStore
from .rest_store import RestDataStore, RestRequestError
from .synchronizer import DeliverySynchronizer, build_metadata, run_sync

__all__ = [
    "DeliverySynchronizer",
    "RecordStore",
    "RestDataStore",
    "RestRequestError",
    "build_metadata",
    "run_sync",
]
