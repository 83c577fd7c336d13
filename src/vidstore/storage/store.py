"""Abstract document store interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from vidstore.models import Document


class DocumentStore(ABC):
    """Abstract base class defining the persisted-document contract.

    The store owns the single source-of-truth document. Repositories hold
    no state of their own: every operation goes through ``transaction()``
    (mutations) or ``read()`` (queries), which re-load the document each time.
    Concrete backends must make ``save`` atomic from a reader's point of view.
    """

    @abstractmethod
    def load(self) -> Document:
        """Read the persisted document.

        Raises:
            StoreUnavailable: If the document is missing, unreadable or malformed.
        """

    @abstractmethod
    def save(self, document: Document) -> None:
        """Replace the persisted document's full contents.

        Raises:
            StoreUnavailable: If the write fails. The previous document stays intact.
        """

    @abstractmethod
    def exists(self) -> bool:
        """Check whether a persisted document is present."""

    @abstractmethod
    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the store's write lock for the duration of the block."""

    def initialize(self, seed: Document | None = None) -> bool:
        """Create the document from ``seed`` if none exists yet.

        Returns:
            True if a document was written, False if one already existed.
        """
        with self.lock():
            if self.exists():
                return False
            self.save(seed if seed is not None else Document())
            return True

    def read(self) -> Document:
        """Load the document under the lock."""
        with self.lock():
            return self.load()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Run one load → mutate → save cycle under the lock.

        The yielded document is a private copy. It is saved only if the
        block exits normally; on any exception nothing is written and the
        exception propagates.
        """
        with self.lock():
            document = self.load()
            yield document
            self.save(document)
