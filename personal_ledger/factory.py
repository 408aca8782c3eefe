"""
Application Wiring for Personal Ledger

This module ties together settings, logging, storage and the ledger.

DESIGN DECISION: There is no module-level ledger. The presentation layer
calls create_ledger() once per session and keeps the returned object.
Tests build a Ledger directly with an in-memory store.
"""

from typing import Optional

from personal_ledger.config import Settings, get_settings
from personal_ledger.ledger import Ledger
from personal_ledger.logger import configure_logging
from personal_ledger.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    KeyValueTransactionStore,
)
from personal_ledger.validation import AmountParser, TransactionValidator


def create_key_value_store(settings: Optional[Settings] = None) -> KeyValueStoreInterface:
    """Build the key-value store selected by the storage settings."""
    storage_settings = (settings or get_settings()).storage
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(storage_settings.data_dir)


def create_ledger(
    settings: Optional[Settings] = None,
    key_value_store: Optional[KeyValueStoreInterface] = None,
) -> Ledger:
    """
    Create a ready-to-use ledger.

    Args:
        settings: Application settings. Defaults to get_settings().
        key_value_store: Store to use instead of the configured backend

    Returns:
        A Ledger that has already loaded the stored transactions
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level, app_settings.log_json)

    if key_value_store is None:
        key_value_store = create_key_value_store(settings)

    store = KeyValueTransactionStore(key_value_store, key=storage_settings.key)
    validator = TransactionValidator(
        AmountParser(app_settings.decimal_separators_list)
    )

    ledger = Ledger(store, validator=validator)
    ledger.load()
    return ledger
