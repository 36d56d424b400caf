"""Corpus layout configuration.

The corpus is organised as a set of numbered folders, each holding one
subdirectory per label::

    <root>/
        enron1/ham/...   enron1/spam/...
        ...
        enron5/ham/...   enron5/spam/...
        enron6/ham/...   enron6/spam/...     (held out for evaluation)

The layout can be overridden with a TOML file::

    [corpus]
    root = "data"
    training_sets = ["enron1", "enron2", "enron3", "enron4", "enron5"]
    test_set = "enron6"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from .corpus import DocumentSource, FileSystemSource
from .models import CorpusLayoutError, MailType

DEFAULT_CONFIG_NAME = "mail-categorizer.toml"
DEFAULT_TRAINING_SETS = ("enron1", "enron2", "enron3", "enron4", "enron5")
DEFAULT_TEST_SET = "enron6"


class ConfigError(Exception):
    """Raised when a configuration file cannot be parsed."""


@dataclass
class CorpusLayout:
    """Where the training and held-out corpora live.

    Attributes:
        root: Directory containing the numbered corpus folders.
        training_sets: Folder names used to train both labels.
        test_set: Folder name holding the held-out documents.
    """

    root: Path = field(default_factory=lambda: Path("."))
    training_sets: list[str] = field(default_factory=lambda: list(DEFAULT_TRAINING_SETS))
    test_set: str = DEFAULT_TEST_SET

    def training_dirs(self, mail_type: MailType) -> list[Path]:
        """Training directories for one label."""
        return [self.root / name / mail_type.value for name in self.training_sets]

    def test_dir(self, mail_type: MailType) -> Path:
        """Held-out directory for one label."""
        return self.root / self.test_set / mail_type.value

    def validate(self, source: DocumentSource | None = None) -> None:
        """Check the layout before any model is built.

        Every training and held-out directory must exist, and each label
        must have at least one training document.

        Raises:
            CorpusLayoutError: Describing every problem found.
        """
        source = source or FileSystemSource()
        problems: list[str] = []

        if not self.training_sets:
            problems.append("no training sets configured")

        for mail_type in MailType:
            training = self.training_dirs(mail_type)
            missing = [d for d in [*training, self.test_dir(mail_type)] if not d.is_dir()]
            problems.extend(f"missing directory: {d}" for d in missing)

            present = [d for d in training if d not in missing]
            if present and not any(source.has_files(d) for d in present):
                problems.append(f"no {mail_type.value} training documents found")

        if problems:
            raise CorpusLayoutError("Invalid corpus layout: " + "; ".join(problems))

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> "CorpusLayout":
        """Load a layout from a TOML file.

        A relative ``root`` is resolved against the file's directory.

        Raises:
            OSError: If the file cannot be read.
            ConfigError: If the file is not valid TOML or has bad values.
        """
        path = Path(path)
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

        return cls._from_dict(data, base=path.parent)

    def save(self, path: str | Path) -> None:
        """Write the layout to a TOML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    @classmethod
    def _from_dict(cls, data: dict[str, Any], base: Path) -> "CorpusLayout":
        corpus = data.get("corpus", {})
        if not isinstance(corpus, dict):
            raise ConfigError("[corpus] must be a table")

        root = corpus.get("root", ".")
        training_sets = corpus.get("training_sets", list(DEFAULT_TRAINING_SETS))
        test_set = corpus.get("test_set", DEFAULT_TEST_SET)

        if not isinstance(root, str):
            raise ConfigError("corpus.root must be a string")
        if not isinstance(training_sets, list) or not all(
            isinstance(name, str) for name in training_sets
        ):
            raise ConfigError("corpus.training_sets must be a list of strings")
        if not isinstance(test_set, str):
            raise ConfigError("corpus.test_set must be a string")

        root_path = Path(root)
        if not root_path.is_absolute():
            root_path = base / root_path

        return cls(root=root_path, training_sets=training_sets, test_set=test_set)

    def _to_dict(self) -> dict[str, Any]:
        return {
            "corpus": {
                "root": str(self.root),
                "training_sets": list(self.training_sets),
                "test_set": self.test_set,
            }
        }
