"""Batch classification of held-out mail directories."""

from __future__ import annotations

import logging
from pathlib import Path

from .classifier import MailCategorizer
from .config import CorpusLayout
from .corpus import DocumentSource, FileSystemSource
from .models import CategoryTally, EvaluationReport, MailType

logger = logging.getLogger(__name__)


def categorize_directory(
    categorizer: MailCategorizer,
    mail_type: MailType,
    directory: str | Path,
    source: DocumentSource | None = None,
) -> CategoryTally:
    """Classify every document below ``directory`` and tally the outcomes.

    Args:
        categorizer: Trained classifier.
        mail_type: True label of the documents in ``directory``.
        directory: Held-out directory to classify.
        source: Where documents are read from. Defaults to the file system.

    Returns:
        CategoryTally with ham and spam counts.

    Raises:
        OSError: If the directory or any document is unreadable. No partial
            tally is returned.
    """
    source = source or FileSystemSource()
    tally = CategoryTally(label=mail_type)

    for path in source.list_files(Path(directory)):
        tally.add(categorizer.classify_file(path, source).mail_type)

    logger.info(
        f"Categorized {mail_type.value}: {tally.ham} ham, {tally.spam} spam "
        f"({tally.accuracy:.2%} correct)"
    )
    return tally


def evaluate(
    categorizer: MailCategorizer,
    layout: CorpusLayout,
    source: DocumentSource | None = None,
) -> EvaluationReport:
    """Classify the held-out ham set, then the held-out spam set.

    Raises:
        OSError: If any held-out directory or document is unreadable.
    """
    tallies = {
        mail_type: categorize_directory(
            categorizer, mail_type, layout.test_dir(mail_type), source
        )
        for mail_type in MailType
    }
    return EvaluationReport(
        tallies=tallies,
        ham_total=categorizer.ham_total,
        spam_total=categorizer.spam_total,
        ham_vocabulary=len(categorizer.ham_model),
        spam_vocabulary=len(categorizer.spam_model),
    )
