"""Firestore Client - Persistence for the tracker's record store.

This module handles all database I/O. The whole record store lives under a
single key as one JSON string; business logic is in the core module.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from google.cloud import firestore
from pydantic import TypeAdapter

from ..core.catalog import STORE_KEY
from ..core.models import DayRecord, RecordStore


logger = logging.getLogger(__name__)

_store_adapter = TypeAdapter(dict[str, DayRecord])


@dataclass
class FirestoreConfig:
    """Configuration for Firestore client.

    Attributes:
        project_id: GCP project ID (None for default)
        database: Firestore database name (None for default database)
        collection: Collection holding one document per key
    """

    project_id: str | None = None
    database: str | None = None
    collection: str = "kv"


class FirestoreKeyValueStore:
    """String key-value store backed by Firestore.

    Document structure:
        {collection}/{key}: { value: "<string>" }
    """

    def __init__(self, config: FirestoreConfig | None = None) -> None:
        """Initialize Firestore client.

        Args:
            config: Firestore configuration
        """
        self.config = config or FirestoreConfig()
        self._client: firestore.Client | None = None

    @property
    def client(self) -> firestore.Client:
        """Lazy initialization of Firestore client."""
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self.config.project_id:
                kwargs["project"] = self.config.project_id
            if self.config.database:
                kwargs["database"] = self.config.database
            self._client = firestore.Client(**kwargs)
        return self._client

    def _doc_ref(self, key: str) -> firestore.DocumentReference:
        """Get reference to the document stored under a key."""
        return self.client.collection(self.config.collection).document(key)

    def get(self, key: str) -> dict[str, str] | None:
        """Fetch a value.

        Args:
            key: Store key

        Returns:
            {"value": ...} if found, None otherwise

        Raises:
            Exception: Any backend error is passed on to the caller
        """
        logger.debug("Fetching key: %s", key)
        doc = self._doc_ref(key).get()
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        if "value" not in data:
            return None
        return {"value": data["value"]}

    def set(self, key: str, value: str) -> bool:
        """Store a value under a key.

        Args:
            key: Store key
            value: String to store

        Returns:
            True if successful
        """
        logger.info("Saving key: %s (%d chars)", key, len(value))
        try:
            self._doc_ref(key).set({"value": value})
            return True
        except Exception as e:
            logger.error("Failed to save key %s: %s", key, str(e))
            return False


class RecordStoreRepository:
    """Loads and saves the whole record store as one JSON document.

    Every save writes the full store; there is no incremental update.
    """

    def __init__(self, kv: FirestoreKeyValueStore, key: str = STORE_KEY) -> None:
        """Initialize repository.

        Args:
            kv: Key-value store the records are kept in
            key: Key holding the serialized store
        """
        self._kv = kv
        self.key = key

    def load(self) -> RecordStore:
        """Load the record store.

        A missing, unreachable or malformed stored value gives an empty store.

        Returns:
            Date key -> DayRecord, in stored order
        """
        try:
            result = self._kv.get(self.key)
            if result is None:
                logger.info("No existing data, starting fresh")
                return {}
            store = _store_adapter.validate_python(json.loads(result["value"]))
            logger.info("Loaded %d day records", len(store))
            return store
        except Exception as e:
            logger.error("Failed to load records, starting fresh: %s", str(e))
            return {}

    def save(self, store: RecordStore) -> bool:
        """Write the full record store back.

        Args:
            store: The record store

        Returns:
            True if successful
        """
        try:
            payload = json.dumps(
                {key: record.model_dump() for key, record in store.items()},
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            logger.error("Failed to serialize records: %s", str(e))
            return False
        return self._kv.set(self.key, payload)
