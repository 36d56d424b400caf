"""Frequency model construction from labeled mail corpora.

A ``FrequencyModelBuilder`` owns a mutable word counter while a corpus is
being ingested. Calling ``build()`` freezes the counts into a read-only
``FrequencyModel``; the builder is not shared between labels.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from .corpus import DocumentSource, FileSystemSource
from .models import FrequencyModel, MailType, PreconditionError
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class FrequencyModelBuilder:
    """Accumulates word counts for a single label.

    Example::

        builder = FrequencyModelBuilder()
        builder.ingest_directory("enron1/ham")
        builder.ingest_directory("enron2/ham")
        ham_model = builder.build()

    Args:
        source: Where documents are read from. Defaults to the file system.
        tokenizer: Callable turning raw bytes into words.
    """

    def __init__(
        self,
        source: DocumentSource | None = None,
        tokenizer: Callable[[bytes], list[str]] = tokenize,
    ) -> None:
        self._source = source or FileSystemSource()
        self._tokenizer = tokenizer
        self._counts: Counter[str] = Counter()
        self._documents = 0

    @property
    def counts(self) -> Mapping[str, int]:
        """Read-only view of the counts gathered so far."""
        return MappingProxyType(self._counts)

    @property
    def total_count(self) -> int:
        """Sum of all counts gathered so far."""
        return sum(self._counts.values())

    @property
    def document_count(self) -> int:
        """Number of documents ingested."""
        return self._documents

    def ingest_words(self, words: Iterable[str]) -> None:
        """Add one occurrence for each word in ``words``."""
        self._counts.update(words)

    def ingest_document(self, path: str | Path) -> None:
        """Read, tokenize and count a single document.

        Raises:
            OSError: If the document cannot be read.
        """
        data = self._source.read(Path(path))
        self.ingest_words(self._tokenizer(data))
        self._documents += 1

    def ingest_directory(self, path: str | Path) -> int:
        """Ingest every document below ``path``.

        Returns:
            Number of documents ingested from this directory.

        Raises:
            OSError: If the directory or any document in it is unreadable.
                Counts gathered before the failure are left in place, but
                the builder should be discarded.
        """
        logger.info(f"Processing {path}")
        ingested = 0
        for file_path in self._source.list_files(Path(path)):
            self.ingest_document(file_path)
            ingested += 1
        logger.debug(f"Ingested {ingested} documents from {path}")
        return ingested

    def build(self) -> FrequencyModel:
        """Freeze the current counts into a ``FrequencyModel``."""
        return FrequencyModel(dict(self._counts))


def build_label_model(
    mail_type: MailType,
    directories: Iterable[str | Path],
    source: DocumentSource | None = None,
) -> FrequencyModel:
    """Build the frequency model for one label from its training directories.

    Args:
        mail_type: Label being trained.
        directories: Training directories holding that label's documents.
        source: Where documents are read from. Defaults to the file system.

    Returns:
        The finished, read-only model.

    Raises:
        OSError: If any directory or document is unreadable.
        PreconditionError: If the corpus contains no words at all.
    """
    builder = FrequencyModelBuilder(source=source)
    for directory in directories:
        builder.ingest_directory(directory)

    model = builder.build()
    if model.total_count == 0:
        raise PreconditionError(
            f"No words found in the {mail_type.value} training corpus "
            f"({builder.document_count} documents)"
        )

    logger.info(f"Processing {mail_type.value} complete!")
    return model
