"""Core primitives shared by every engine."""

from .genes import GeneAnnotation
from .sequence import Sequence

__all__ = ["GeneAnnotation", "Sequence"]
