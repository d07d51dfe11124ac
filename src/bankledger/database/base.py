"""Abstract persistence interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from bankledger.domain.entities import LedgerSnapshot


class SnapshotStore(ABC):
    """Abstract persistence provider for ledger snapshots.

    Implementations raise ``PersistenceError`` subclasses for failures the
    ledger should report without crashing.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the underlying storage."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the underlying storage."""
        pass

    @abstractmethod
    def load(self) -> Optional[LedgerSnapshot]:
        """Read the stored snapshot, or None if nothing has been saved yet.

        Raises:
            PersistenceLoadError: If stored data is unreadable or corrupt
        """
        pass

    @abstractmethod
    def save(self, snapshot: LedgerSnapshot) -> None:
        """Replace the stored snapshot.

        Raises:
            PersistenceSaveError: If the snapshot could not be written
        """
        pass
