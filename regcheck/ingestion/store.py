"""
Document store gateways supplying candidate legal provisions.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from ..exceptions import DocumentStoreError
from ..models import LegalProvision


logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """Abstract base class for document store gateways."""

    @abstractmethod
    def fetch(
        self,
        categories: Iterable[str],
        limit: int,
        primary_jurisdiction: Optional[str] = None
    ) -> list[LegalProvision]:
        """
        Fetch candidate provisions in the given categories.

        Args:
            categories: Category names to include
            limit: Maximum number of provisions to return
            primary_jurisdiction: Optional jurisdiction hint for backends
                that can use it; order of the result is not significant

        Returns:
            List of provisions, possibly empty

        Raises:
            DocumentStoreError: If the store cannot be queried
        """
        pass


def _select(
    provisions: Iterable[LegalProvision],
    categories: Iterable[str],
    limit: int
) -> list[LegalProvision]:
    """Keep provisions in the wanted categories, in store order, up to limit."""
    wanted = set(categories)
    selected = [p for p in provisions if p.category in wanted]
    return selected[:max(0, limit)]


class InMemoryDocumentStore(DocumentStore):
    """Store backed by a fixed sequence of provisions."""

    def __init__(self, provisions: Iterable[LegalProvision] = ()):
        self._provisions = tuple(provisions)

    def fetch(
        self,
        categories: Iterable[str],
        limit: int,
        primary_jurisdiction: Optional[str] = None
    ) -> list[LegalProvision]:
        return _select(self._provisions, categories, limit)

    def __len__(self) -> int:
        return len(self._provisions)


class JSONDocumentStore(DocumentStore):
    """
    Store backed by a JSON file of provision records.

    The file holds either a list of records or an object with a
    "documents" list. It is re-read on every fetch so edits are picked
    up without restarting.
    """

    def __init__(self, path: str):
        self.path = path

    def fetch(
        self,
        categories: Iterable[str],
        limit: int,
        primary_jurisdiction: Optional[str] = None
    ) -> list[LegalProvision]:
        provisions = self.load_all()
        selected = _select(provisions, categories, limit)
        logger.debug(
            f"Fetched {len(selected)} of {len(provisions)} provisions from {self.path}"
        )
        return selected

    def load_all(self) -> list[LegalProvision]:
        """
        Load every provision in the file.

        Returns:
            List of provisions in file order

        Raises:
            DocumentStoreError: If the file is missing, unreadable, or holds
                malformed records
        """
        path = Path(self.path)
        if not path.exists():
            raise DocumentStoreError(f"Document file not found: {self.path}")

        try:
            raw = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            raise DocumentStoreError(f"Cannot read document file {self.path}: {e}") from e

        if isinstance(raw, dict):
            raw = raw.get("documents")
        if not isinstance(raw, list):
            raise DocumentStoreError(
                f"Document file {self.path} must contain a list of records"
            )

        provisions = []
        for index, record in enumerate(raw):
            if not isinstance(record, dict):
                raise DocumentStoreError(f"Record {index} in {self.path} is not an object")
            provisions.append(LegalProvision.from_record(record))

        return provisions
