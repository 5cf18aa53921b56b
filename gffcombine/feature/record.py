"""
Object representation of a single parsed GFF3/GTF row.

A :class:`FeatureRecord` is the unit passed in and out of :class:`~gffcombine.combiner.FeatureCombiner`. Records
compare by identity: two rows with identical content are still two records, which is what allows the combiner to
track exactly which inputs were consumed.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from methodtools import lru_cache

from gffcombine.feature.types import DEFAULT_NAME_FIELDS, GFF3_ATTRIBUTE_DELIMITER, FeatureKind
from gffcombine.strand import Strand

# marks the boundary between sections of a popup, such as between a transcript and the exon under the cursor
POPUP_SEPARATOR = "<hr>"


class PopupItem:
    """One label/value row of a popup."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, PopupItem):
            return False
        return self.name == other.name and self.value == other.value

    def __hash__(self):
        return hash((self.name, self.value))

    def __repr__(self):
        return f"PopupItem({self.name!r}, {self.value!r})"


PopupData = List[Union[PopupItem, str]]


def format_number(value: int) -> str:
    """Default position formatter; groups thousands with commas."""
    return "{:,}".format(value)


class FeatureRecord:
    """
    A genomic interval with a type and free-form attributes.

    Coordinates are 0-based and half-open. ``parent`` is a single identifier for GTF-style grouping or a
    comma-separated list for GFF3 features with multiple parents. ``delim`` separates keys from values inside one
    entry of ``attribute_string`` (``=`` for GFF3, a space for GTF).

    ``cd_start``, ``cd_end``, ``utr``, ``children`` and ``exons`` are merge markers. They are unset on parsed input
    and are filled in on copies made while assembling transcripts.
    """

    def __init__(
        self,
        chr: str,
        start: int,
        end: int,
        type: Optional[str],
        strand: Optional[Union[Strand, str]] = None,
        id: Optional[str] = None,
        parent: Optional[str] = None,
        name: Optional[str] = None,
        attribute_string: Optional[str] = None,
        delim: str = GFF3_ATTRIBUTE_DELIMITER,
        cd_start: Optional[int] = None,
        cd_end: Optional[int] = None,
        utr: bool = False,
        children: Optional[List["FeatureRecord"]] = None,
        exons: Optional[List["FeatureRecord"]] = None,
    ):
        self.chr = chr
        self.start = start
        self.end = end
        self.type = type
        self.strand = Strand.from_symbol(strand) if isinstance(strand, str) else strand
        self.id = id
        self.parent = parent
        self.name = name
        self.attribute_string = attribute_string
        self.delim = delim
        self.cd_start = cd_start
        self.cd_end = cd_end
        self.utr = utr
        self.children = children
        self.exons = exons

    def __str__(self):
        return f"FeatureRecord({self.type}, {self.chr}:{self.start}-{self.end}:{self.strand}, id={self.id})"

    def __repr__(self):
        return "<{}>".format(str(self))

    @property
    def kind(self) -> FeatureKind:
        return FeatureKind.of(self.type)

    @property
    def is_coding(self) -> bool:
        return self.cd_start is not None and self.cd_end is not None

    def _fields(self) -> Dict[str, Any]:
        return dict(
            chr=self.chr,
            start=self.start,
            end=self.end,
            type=self.type,
            strand=self.strand,
            id=self.id,
            parent=self.parent,
            name=self.name,
            attribute_string=self.attribute_string,
            delim=self.delim,
            cd_start=self.cd_start,
            cd_end=self.cd_end,
            utr=self.utr,
        )

    def copy(self) -> "FeatureRecord":
        """Copy this record. Nested ``children`` and ``exons`` lists are new lists holding the same members, so
        widening or appending to the copy never reaches back into this record."""
        return FeatureRecord(
            children=list(self.children) if self.children is not None else None,
            exons=list(self.exons) if self.exons is not None else None,
            **self._fields(),
        )

    def contains(self, other: "FeatureRecord") -> bool:
        """Does this record's span fully contain the span of ``other``?"""
        return self.start <= other.start and self.end >= other.end

    def overlaps_position(self, position: int) -> bool:
        return self.start <= position < self.end

    def parents(self) -> Tuple[str, ...]:
        """Parse ``parent`` into identifiers. GFF3 allows a comma-separated list; empty entries are dropped."""
        if not self.parent or not self.parent.strip():
            return tuple()
        return tuple(p.strip() for p in self.parent.strip().split(",") if p.strip())

    @lru_cache(maxsize=1)
    def attributes(self) -> Tuple[Tuple[str, str], ...]:
        """
        Parse ``attribute_string`` into ordered key/value pairs.

        Entries are separated by ``;`` and split once on ``delim``. Entries that do not produce both a key and a
        value are skipped. Values wrapped in double quotes, as in GTF, are unquoted.
        """
        if not self.attribute_string:
            return tuple()
        pairs = []
        for entry in self.attribute_string.split(";"):
            tokens = entry.strip().split(self.delim, 1)
            if len(tokens) < 2:
                continue
            key = tokens[0].strip()
            value = tokens[1].strip()
            if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                value = value[1:-1]
            pairs.append((key, value))
        return tuple(pairs)

    @property
    def display_name(self) -> Optional[str]:
        """``name`` if set, otherwise the value of the first well-known naming attribute."""
        if self.name:
            return self.name
        by_key = {}
        for key, value in self.attributes():
            by_key.setdefault(key.lower(), value)
        for field in DEFAULT_NAME_FIELDS:
            if field in by_key:
                return by_key[field]
        return None

    def popup_data(self, position: int, number_formatter: Callable[[int], str] = format_number) -> PopupData:
        """Label/value rows describing this record, for display when ``position`` is clicked."""
        data: PopupData = []
        if self.name:
            data.append(PopupItem("name", self.name))
        data.append(PopupItem("type", self.type))
        for key, value in self.attributes():
            if key.lower() == "name":
                continue
            data.append(PopupItem(key, value))
        data.append(
            PopupItem("position", f"{self.chr}:{number_formatter(self.start + 1)}-{number_formatter(self.end)}")
        )
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dict usable by :class:`gffcombine.io.models.FeatureRecordModel`."""
        vals = self._fields()
        vals["strand"] = self.strand.name if self.strand else None
        vals["children"] = [c.to_dict() for c in self.children] if self.children is not None else None
        vals["exons"] = [e.to_dict() for e in self.exons] if self.exons is not None else None
        return vals
