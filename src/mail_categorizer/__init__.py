"""mail-categorizer -- Naive Bayes ham/spam classification of mail corpora."""

__version__ = "0.1.0"

from .builder import FrequencyModelBuilder, build_label_model
from .classifier import MailCategorizer
from .config import ConfigError, CorpusLayout
from .corpus import DocumentSource, FileSystemSource
from .evaluation import categorize_directory, evaluate
from .models import (
    CategoryTally,
    CorpusLayoutError,
    EvaluationReport,
    FrequencyModel,
    MailScores,
    MailType,
    PreconditionError,
)
from .tokenizer import document_word_counts, tokenize, word_counts

__all__ = [
    # Models
    "MailType",
    "FrequencyModel",
    "MailScores",
    "CategoryTally",
    "EvaluationReport",
    # Training
    "FrequencyModelBuilder",
    "build_label_model",
    # Classification
    "MailCategorizer",
    "categorize_directory",
    "evaluate",
    # Tokenization
    "tokenize",
    "word_counts",
    "document_word_counts",
    # Corpus access and configuration
    "DocumentSource",
    "FileSystemSource",
    "CorpusLayout",
    # Errors
    "PreconditionError",
    "CorpusLayoutError",
    "ConfigError",
]
