"""Naive Bayes ham/spam categorizer.

Scores a document against two word-frequency models, one per label.
For the ham model total ``H``, spam model total ``S`` and ``T = H + S``,
each distinct document word ``w`` seen in *both* models contributes::

    p_d_ham  += log(ham(w) / H)
    p_d_spam += log(spam(w) / S)
    p_d      += log((ham(w) + spam(w)) / T)

and the final scores are::

    ham  = p_d_ham  + log(H / T) - p_d
    spam = p_d_spam + log(S / T) - p_d

Known approximation: a word missing from either model is skipped rather
than smoothed, so a word seen only in spam training data does not push a
document towards spam. How often a word repeats inside the scored
document is also ignored; only its presence counts.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from .builder import build_label_model
from .corpus import DocumentSource, FileSystemSource
from .models import FrequencyModel, MailScores, MailType, PreconditionError
from .tokenizer import document_word_counts

if TYPE_CHECKING:
    from .config import CorpusLayout

logger = logging.getLogger(__name__)


class MailCategorizer:
    """Two-label Naive Bayes classifier over word-frequency models.

    The instance is read-only once constructed.

    Example::

        categorizer = MailCategorizer(ham_model, spam_model)
        scores = categorizer.score(Counter(["free", "win"]))
        print(scores.mail_type)  # MailType.SPAM

    Args:
        ham_model: Word counts of the ham training corpus.
        spam_model: Word counts of the spam training corpus.

    Raises:
        PreconditionError: If either model has a zero word total.
    """

    def __init__(self, ham_model: FrequencyModel, spam_model: FrequencyModel) -> None:
        for mail_type, model in ((MailType.HAM, ham_model), (MailType.SPAM, spam_model)):
            if model.total_count <= 0:
                raise PreconditionError(
                    f"The {mail_type.value} model is empty; cannot compute its prior"
                )

        self._ham_model = ham_model
        self._spam_model = spam_model
        self._ham_total = ham_model.total_count
        self._spam_total = spam_model.total_count
        self._total_count = self._ham_total + self._spam_total

    @classmethod
    def train(
        cls,
        layout: "CorpusLayout",
        source: DocumentSource | None = None,
    ) -> "MailCategorizer":
        """Validate ``layout`` and train both label models from it.

        Raises:
            CorpusLayoutError: If the layout is invalid.
            OSError: If any training document is unreadable.
            PreconditionError: If a label's corpus contains no words.
        """
        layout.validate(source)
        ham_model = build_label_model(MailType.HAM, layout.training_dirs(MailType.HAM), source)
        spam_model = build_label_model(MailType.SPAM, layout.training_dirs(MailType.SPAM), source)
        return cls(ham_model, spam_model)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def ham_model(self) -> FrequencyModel:
        return self._ham_model

    @property
    def spam_model(self) -> FrequencyModel:
        return self._spam_model

    @property
    def ham_total(self) -> int:
        return self._ham_total

    @property
    def spam_total(self) -> int:
        return self._spam_total

    @property
    def total_count(self) -> int:
        """Combined word total of both models."""
        return self._total_count

    @property
    def priors(self) -> tuple[float, float]:
        """Log priors ``(log(H/T), log(S/T))``."""
        return (
            math.log(self._ham_total / self._total_count),
            math.log(self._spam_total / self._total_count),
        )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(self, document_word_counts: Mapping[str, int]) -> MailScores:
        """Compute ham and spam log-scores for one document.

        Args:
            document_word_counts: Bag-of-words of the document. Only the
                keys matter.

        Returns:
            MailScores. A document with no word known to both models
            scores exactly the log priors.
        """
        log_p_ham, log_p_spam = self.priors
        p_d_ham = 0.0
        p_d_spam = 0.0
        p_d = 0.0

        for word in document_word_counts:
            ham_count = self._ham_model.count(word)
            spam_count = self._spam_model.count(word)
            if ham_count == 0 or spam_count == 0:
                continue
            p_d_ham += math.log(ham_count / self._ham_total)
            p_d_spam += math.log(spam_count / self._spam_total)
            p_d += math.log((ham_count + spam_count) / self._total_count)

        return MailScores(
            ham=p_d_ham + log_p_ham - p_d,
            spam=p_d_spam + log_p_spam - p_d,
        )

    def categorize(self, document_word_counts: Mapping[str, int]) -> MailType:
        """Label a document: ham if its ham score is higher, otherwise spam."""
        return self.score(document_word_counts).mail_type

    def score_text(self, data: bytes | str) -> MailScores:
        """Tokenize raw bytes or text and score the result."""
        return self.score(document_word_counts(data))

    def classify_file(
        self,
        path: str | Path,
        source: DocumentSource | None = None,
    ) -> MailScores:
        """Read a document and score it.

        Raises:
            OSError: If the document cannot be read.
        """
        source = source or FileSystemSource()
        scores = self.score_text(source.read(Path(path)))
        logger.debug(
            f"{path}: ham={scores.ham:.4f} spam={scores.spam:.4f} -> {scores.mail_type.value}"
        )
        return scores
