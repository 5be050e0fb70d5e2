"""Classification of storage entries against the rule set."""

from azsnaffler.classifier.classifier import BlobPolicy, Classifier, DecisionPolicy, TreePolicy
from azsnaffler.classifier.models import Candidate, EntryKind, Finding, ReasonKind

__all__ = [
    "BlobPolicy",
    "Candidate",
    "Classifier",
    "DecisionPolicy",
    "EntryKind",
    "Finding",
    "ReasonKind",
    "TreePolicy",
]
