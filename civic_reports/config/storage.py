"""
Key-value storage engine initialization.
Single-source-of-truth storage engine for Civic Reports.

The report store only needs get/set by key with no transactions. Three
engines satisfy that contract:
- file: one JSON document on the device (default)
- memory: process-local dict (tests, demos)
- firestore: one Firestore document per key
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import json
import logging
import os
import tempfile

from civic_reports.core.settings import settings

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    Contract:
    - get(key) returns the raw string or None when the entry is absent
    - set(key, value) replaces the whole entry or raises
    """

    name = "abstract"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """
    All keys live in one JSON object file: {"KEY": "<raw string>", ...}.
    Writes go to a temp file in the same directory and are swapped in with
    os.replace, so a reader sees either the old file or the new one.
    """

    name = "file"

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def _read_for_update(self) -> Dict[str, str]:
        """
        Current contents for a write. An unreadable file is moved aside to
        <path>.corrupt and the write starts from an empty object.
        """
        try:
            return self._read_all()
        except ValueError as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            backup_path = f"{self.path}.corrupt"
            os.replace(self.path, backup_path)
            logger.warning(f"[STORAGE] Unreadable storage file moved to {backup_path}: {e}")
            return {}

    def set(self, key: str, value: str) -> None:
        data = self._read_for_update()
        data[key] = value

        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".civic_reports_", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class FirestoreKeyValueStore(KeyValueStore):
    """One document per key in a single collection, value kept in the "value" field."""

    name = "firestore"

    def __init__(self, client, collection: str):
        self.client = client
        self.collection = collection

    def get(self, key: str) -> Optional[str]:
        doc = self.client.collection(self.collection).document(key).get()
        if not doc.exists:
            return None
        return (doc.to_dict() or {}).get("value")

    def set(self, key: str, value: str) -> None:
        # Document set() overwrites the whole document in one write
        self.client.collection(self.collection).document(key).set({"value": value})


def _create_firestore_client():
    import firebase_admin
    from firebase_admin import credentials, firestore, initialize_app

    if not firebase_admin._apps:
        cred_path = settings.FIREBASE_CREDENTIALS_PATH
        if cred_path:
            if not os.path.exists(cred_path):
                raise FileNotFoundError(
                    f"Firebase credentials file not found: {cred_path}\n"
                    f"Please check your .env file and ensure FIREBASE_CREDENTIALS_PATH is correct."
                )
            options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
            initialize_app(credentials.Certificate(cred_path), options)
            logger.info("[STORAGE] Firebase Admin SDK initialized with service account")
        else:
            logger.info("[STORAGE] No credentials path set, using Application Default Credentials")
            initialize_app()

    return firestore.client()


_storage: Optional[KeyValueStore] = None


def initialize_storage() -> KeyValueStore:
    global _storage

    if _storage is not None:
        return _storage

    backend = settings.STORAGE_BACKEND.lower()

    if backend == "memory":
        _storage = InMemoryKeyValueStore()
    elif backend == "file":
        _storage = JsonFileKeyValueStore(settings.STORAGE_PATH)
    elif backend == "firestore":
        try:
            client = _create_firestore_client()
        except Exception as e:
            raise RuntimeError(
                f"Firestore storage initialization FAILED. Error: {e}\n"
                f"Please check your Firebase credentials and configuration."
            ) from e
        _storage = FirestoreKeyValueStore(client, settings.FIRESTORE_COLLECTION)
    else:
        raise RuntimeError(
            f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}'. Use one of: file, memory, firestore"
        )

    logger.info(f"[STORAGE] USING {_storage.name.upper()} STORAGE ENGINE")
    return _storage


def get_storage() -> KeyValueStore:
    """
    Get the initialized storage engine, initializing it on first use.
    """
    if _storage is None:
        return initialize_storage()
    return _storage


def reset_storage() -> None:
    """Drop the cached engine so the next get_storage() re-reads settings."""
    global _storage
    _storage = None
