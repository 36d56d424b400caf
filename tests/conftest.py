"""Shared test fixtures for mail-categorizer tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from mail_categorizer.classifier import MailCategorizer
from mail_categorizer.config import CorpusLayout
from mail_categorizer.corpus import DocumentSource
from mail_categorizer.models import FrequencyModel

# ---------------------------------------------------------------------------
# Synthetic corpus
# ---------------------------------------------------------------------------
#
# Ham totals:  meeting 4, project 3, the 3, team 3, report 2, schedule 2,
#              review 1, notes 1, free 1, offer 1              (H = 21)
# Spam totals: free 4, offer 3, money 2, win 2, prize 2, the 2, now 2,
#              cash 1, claim 1, click 1, meeting 1, project 1  (S = 22)

TRAINING_DOCS = {
    ("enron1", "ham", "h1.txt"): "meeting, project report -- meeting schedule; the team",
    ("enron1", "ham", "h2.txt"): "project report review the meeting notes team 2024 free offer",
    ("enron2", "ham", "nested/h3.txt"): "schedule the team meeting project.",
    ("enron1", "spam", "s1.txt"): "free money!!! win prize free offer the",
    ("enron2", "spam", "s2.txt"): "win free cash prize claim offer now $$$",
    ("enron2", "spam", "s3.txt"): "free money offer click now the meeting project",
}

HELD_OUT_DOCS = {
    ("enron6", "ham", "t1.txt"): "team meeting project update",
    ("enron6", "ham", "t2.txt"): "project report for the team",
    ("enron6", "spam", "t3.txt"): "free offer win now",
    ("enron6", "spam", "t4.txt"): "claim your prize",
}


def write_docs(root: Path, docs: dict[tuple[str, str, str], str]) -> None:
    for (corpus_set, label, name), text in docs.items():
        path = root / corpus_set / label / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


@pytest.fixture
def corpus_root(tmp_path: Path) -> Path:
    """A complete enron1..enron6 layout; enron3..enron5 are left empty."""
    root = tmp_path / "corpus"
    write_docs(root, TRAINING_DOCS)
    write_docs(root, HELD_OUT_DOCS)
    for corpus_set in ("enron3", "enron4", "enron5"):
        for label in ("ham", "spam"):
            (root / corpus_set / label).mkdir(parents=True)
    return root


@pytest.fixture
def layout(corpus_root: Path) -> CorpusLayout:
    return CorpusLayout(root=corpus_root)


# ---------------------------------------------------------------------------
# Hand-built models
# ---------------------------------------------------------------------------


@pytest.fixture
def ham_model() -> FrequencyModel:
    """Ham model from the worked example: H = 6."""
    return FrequencyModel({"free": 1, "meeting": 5})


@pytest.fixture
def spam_model() -> FrequencyModel:
    """Spam model from the worked example: S = 16."""
    return FrequencyModel({"free": 9, "win": 7})


@pytest.fixture
def categorizer(ham_model: FrequencyModel, spam_model: FrequencyModel) -> MailCategorizer:
    return MailCategorizer(ham_model, spam_model)


# ---------------------------------------------------------------------------
# In-memory document source
# ---------------------------------------------------------------------------


class InMemorySource(DocumentSource):
    """Serves documents from a dict. Paths in ``unreadable`` fail on read."""

    def __init__(self, docs: dict[str, bytes], unreadable: set[str] | None = None) -> None:
        self.docs = {Path(p): data for p, data in docs.items()}
        self.unreadable = {Path(p) for p in unreadable or set()}
        self.reads: list[Path] = []

    def read(self, path: Path) -> bytes:
        self.reads.append(path)
        if path in self.unreadable:
            raise PermissionError(f"Permission denied: {path}")
        try:
            return self.docs[path]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def list_files(self, root: Path) -> Iterator[Path]:
        root = Path(root)
        known_dirs = {parent for p in self.docs for parent in p.parents}
        if root not in known_dirs:
            raise FileNotFoundError(f"No such directory: {root}")
        for path in self.docs:
            if root in path.parents:
                yield path


@pytest.fixture
def memory_source() -> InMemorySource:
    return InMemorySource({
        "train/ham/a": b"Hello team, the meeting is at noon",
        "train/ham/deep/b": b"meeting notes attached",
        "train/spam/c": b"Hello WINNER claim the prize",
    })


@pytest.fixture
def make_source() -> type[InMemorySource]:
    """The InMemorySource class, for tests that need a custom corpus."""
    return InMemorySource
