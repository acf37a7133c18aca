"""
Stream package: tokenizing and classifying the game's pseudo-XML protocol.
"""

from .builder import TreeBuilder, tag_value
from .classifier import StreamClassifier
from .scanner import StreamScanner
from .tokenizer import StreamTokenizer

__all__ = [
    "StreamClassifier",
    "StreamScanner",
    "StreamTokenizer",
    "TreeBuilder",
    "tag_value",
]
