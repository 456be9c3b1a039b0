"""Gene annotation records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

Strand = Literal["+", "-"]

# camelCase keys emitted by annotation stores, mapped to field names
_FIELD_ALIASES = {
    "locusTag": "locus_tag",
    "startPos": "start_pos",
    "endPos": "end_pos",
}


@dataclass(frozen=True, slots=True)
class GeneAnnotation:
    """A single annotated gene.

    Coordinates are 0-based, half-open ``[start_pos, end_pos)``.
    """

    id: int | str
    start_pos: int
    end_pos: int
    strand: Strand = "+"
    name: str | None = None
    locus_tag: str | None = None
    product: str | None = None

    def __post_init__(self) -> None:
        if self.strand not in ("+", "-"):
            msg = f"strand must be '+' or '-', got {self.strand!r}"
            raise ValueError(msg)

    @property
    def length(self) -> int:
        return max(0, self.end_pos - self.start_pos)

    @property
    def label(self) -> str:
        """Display name used in variant reports."""
        return self.name or self.product or self.locus_tag or f"gene-{self.id}"

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> GeneAnnotation:
        """Build an annotation from a loose record (JSON object, CSV row)."""
        data = {_FIELD_ALIASES.get(key, key): value for key, value in record.items()}
        return cls(
            id=data.get("id", 0),
            start_pos=int(data.get("start_pos", 0)),
            end_pos=int(data.get("end_pos", 0)),
            strand=data.get("strand") or "+",
            name=_optional_text(data.get("name")),
            locus_tag=_optional_text(data.get("locus_tag")),
            product=_optional_text(data.get("product")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "locus_tag": self.locus_tag,
            "start_pos": self.start_pos,
            "end_pos": self.end_pos,
            "strand": self.strand,
            "product": self.product,
        }


def _optional_text(value: Any) -> str | None:
    # pandas hands back NaN floats for empty CSV cells
    if value is None or (isinstance(value, float) and value != value):
        return None
    text = str(value)
    return text or None
