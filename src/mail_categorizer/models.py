"""Data models for ham/spam mail categorization."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class MailType(str, Enum):
    """The two mail categories.

    The value doubles as the per-label subdirectory name in a corpus.
    """

    HAM = "ham"
    SPAM = "spam"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PreconditionError(Exception):
    """Raised when a model cannot be trained or used as configured.

    The typical case is a label whose training corpus yields no words,
    which would leave its prior undefined.
    """


class CorpusLayoutError(PreconditionError):
    """Raised when the corpus directories do not match the expected layout."""


# ---------------------------------------------------------------------------
# Frequency Model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FrequencyModel:
    """Read-only bag-of-words aggregated over one labeled corpus.

    Absent words count as zero; the mapping never holds zero entries.
    ``total_count`` is always derived from the mapping.

    Attributes:
        counts: Mapping of word to occurrence count (all counts >= 1).
        total_count: Sum of all counts.
    """

    counts: Mapping[str, int] = field(default_factory=dict, hash=False)
    total_count: int = field(init=False)

    def __post_init__(self) -> None:
        counts = dict(self.counts)
        for word, count in counts.items():
            if count < 1:
                raise ValueError(f"Count for {word!r} must be >= 1, got {count}")
        object.__setattr__(self, "counts", MappingProxyType(counts))
        object.__setattr__(self, "total_count", sum(counts.values()))

    def count(self, word: str) -> int:
        """Occurrences of ``word`` in the corpus (0 if never seen)."""
        return self.counts.get(word, 0)

    def __getitem__(self, word: str) -> int:
        return self.count(word)

    def __contains__(self, word: object) -> bool:
        return word in self.counts

    def __len__(self) -> int:
        return len(self.counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        """Return the ``n`` most frequent words, most frequent first.

        Ties are broken alphabetically so the output is stable.
        """
        ranked = sorted(self.counts.items(), key=lambda x: (-x[1], x[0]))
        return ranked if n is None else ranked[:n]


# ---------------------------------------------------------------------------
# Scores and tallies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MailScores:
    """Unnormalized log-posterior scores for one document.

    Attributes:
        ham: Score for the ham label.
        spam: Score for the spam label.
    """

    ham: float
    spam: float

    @property
    def mail_type(self) -> MailType:
        """Decided label. An exact tie goes to spam."""
        return MailType.HAM if self.ham > self.spam else MailType.SPAM

    def to_dict(self) -> dict:
        return {
            "ham": self.ham,
            "spam": self.spam,
            "mail_type": self.mail_type.value,
        }


@dataclass
class CategoryTally:
    """How many documents of one held-out set landed in each bucket.

    Attributes:
        label: True label of the held-out set.
        ham: Documents classified as ham.
        spam: Documents classified as spam.
    """

    label: MailType
    ham: int = 0
    spam: int = 0

    def add(self, mail_type: MailType) -> None:
        """Record one classified document."""
        if mail_type is MailType.HAM:
            self.ham += 1
        else:
            self.spam += 1

    @property
    def total(self) -> int:
        return self.ham + self.spam

    @property
    def correct(self) -> int:
        """Documents placed in the bucket matching ``label``."""
        return self.ham if self.label is MailType.HAM else self.spam

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "label": self.label.value,
            "ham": self.ham,
            "spam": self.spam,
            "accuracy": round(self.accuracy, 4),
        }


@dataclass
class EvaluationReport:
    """Outcome of classifying the held-out ham and spam sets.

    Attributes:
        tallies: One CategoryTally per held-out label.
        ham_total: Word total of the ham training model.
        spam_total: Word total of the spam training model.
        ham_vocabulary: Distinct words in the ham training model.
        spam_vocabulary: Distinct words in the spam training model.
    """

    tallies: dict[MailType, CategoryTally] = field(default_factory=dict)
    ham_total: int = 0
    spam_total: int = 0
    ham_vocabulary: int = 0
    spam_vocabulary: int = 0

    @property
    def accuracy(self) -> float:
        """Fraction of all held-out documents placed in their true bucket."""
        total = sum(t.total for t in self.tallies.values())
        correct = sum(t.correct for t in self.tallies.values())
        return correct / total if total > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "tallies": {label.value: t.to_dict() for label, t in self.tallies.items()},
            "accuracy": round(self.accuracy, 4),
            "training": {
                "ham_total": self.ham_total,
                "spam_total": self.spam_total,
                "ham_vocabulary": self.ham_vocabulary,
                "spam_vocabulary": self.spam_vocabulary,
            },
        }

    def summary(self) -> str:
        """Plain-text report, one block per held-out set."""
        lines: list[str] = []
        for label, tally in self.tallies.items():
            lines.extend([
                f"Categorized {label.value.title()}:",
                f"  Hams: {tally.ham}",
                f"  Spams: {tally.spam}",
            ])
        return "\n".join(lines)
