"""
Data models. These models allow for validation of records passed to and returned from the combiner, acting as a JSON
schema for serializing and deserializing them.

Combined output is at most three levels deep: a transcript (or a record merged from rows sharing an ``ID``) holds
exons, and an exon holds the CDS and UTR records that fall inside it.
"""
from typing import ClassVar, List, Optional, Type

from marshmallow import EXCLUDE, Schema  # noqa: F401
from marshmallow_dataclass import dataclass

from gffcombine.combiner import FeatureCombiner
from gffcombine.feature.record import FeatureRecord
from gffcombine.feature.transcript import TranscriptModel
from gffcombine.feature.types import GFF3_ATTRIBUTE_DELIMITER, SchemaFormat
from gffcombine.io.exc import InvalidInputError
from gffcombine.strand import Strand


@dataclass
class BaseModel:
    """Base for all of the models."""

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811

    class Meta:
        ordered = True
        unknown = EXCLUDE


@dataclass
class SubFeatureModel(BaseModel):
    """Data model for a record with no nested records, such as a CDS inside an exon."""

    chr: str
    start: int
    end: int
    type: Optional[str]
    strand: Optional[Strand] = None
    id: Optional[str] = None
    parent: Optional[str] = None
    name: Optional[str] = None
    attribute_string: Optional[str] = None
    delim: str = GFF3_ATTRIBUTE_DELIMITER
    cd_start: Optional[int] = None
    cd_end: Optional[int] = None
    utr: bool = False

    def _validate_coding_span(self):
        if (self.cd_start is None) != (self.cd_end is None):
            raise InvalidInputError(f"Record {self.id} must define both or neither of cd_start and cd_end")

    def to_feature_record(self) -> FeatureRecord:
        """Construct a :class:`~gffcombine.feature.record.FeatureRecord` from this model."""
        self._validate_coding_span()
        return FeatureRecord(
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


@dataclass
class ExonModel(SubFeatureModel):
    """Data model for an exon of a transcript, with the CDS and UTR records it contains."""

    children: Optional[List[SubFeatureModel]] = None

    def to_feature_record(self) -> FeatureRecord:
        record = super().to_feature_record()
        if self.children is not None:
            record.children = [child.to_feature_record() for child in self.children]
        return record


@dataclass
class FeatureRecordModel(SubFeatureModel):
    """
    Data model for a top-level record returned by :meth:`~gffcombine.combiner.FeatureCombiner.combine()`.

    When ``is_transcript`` is set the model describes a :class:`~gffcombine.feature.transcript.TranscriptModel`.
    ``gene_id`` records the identifier of the gene the transcript was attached to; the gene itself is not
    serialized with it.
    """

    exons: Optional[List[ExonModel]] = None
    gene_id: Optional[str] = None
    is_transcript: bool = False

    def to_feature_record(self) -> FeatureRecord:
        """Construct a :class:`~gffcombine.feature.record.FeatureRecord`, or a finished
        :class:`~gffcombine.feature.transcript.TranscriptModel` if ``is_transcript`` is set."""
        record = super().to_feature_record()
        exons = [exon.to_feature_record() for exon in self.exons] if self.exons is not None else None
        if not self.is_transcript:
            record.exons = exons
            return record

        transcript = TranscriptModel(record)
        transcript.cd_start = self.cd_start
        transcript.cd_end = self.cd_end
        transcript.utr = self.utr
        transcript.exons = exons or []
        transcript.finished = True
        return transcript

    @staticmethod
    def from_feature_record(record: FeatureRecord) -> "FeatureRecordModel":
        """Convert a :class:`~gffcombine.feature.record.FeatureRecord` to a :class:`FeatureRecordModel`"""
        return FeatureRecordModel.Schema().load(record.to_dict())


@dataclass
class CombinerOptionsModel(BaseModel):
    """Data model that allows construction of a :class:`~gffcombine.combiner.FeatureCombiner`."""

    format: str = SchemaFormat.GFF3.value
    filter_types: Optional[List[str]] = None

    def to_combiner(self) -> FeatureCombiner:
        return FeatureCombiner(format=self.format, filter_types=self.filter_types)
