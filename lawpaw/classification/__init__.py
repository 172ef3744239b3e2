from lawpaw.classification.base import BaseClassifier
from lawpaw.classification.classifier import Classifier
from lawpaw.classification.factory import ClassifierFactory
from lawpaw.classification.models import CANONICAL_FIELDS, DocumentMetadata

__all__ = [
    "CANONICAL_FIELDS",
    "BaseClassifier",
    "Classifier",
    "ClassifierFactory",
    "DocumentMetadata",
]
