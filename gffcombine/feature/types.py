"""
Feature type vocabularies understood when assembling transcripts.

GFF3 and GTF sources spell the same concepts many ways (``mRNA`` vs ``transcript``, ``five_prime_UTR`` vs ``5UTR``).
The synonym sets below collapse these spellings, and :class:`FeatureKind` classifies any type string into a small
closed enumeration. The sets are allow-lists: any type not listed here is :attr:`FeatureKind.OTHER` and is never
folded into a transcript.
"""
from enum import Enum
from typing import Dict, FrozenSet, Optional

TRANSCRIPT_TYPES = frozenset({"transcript", "primary_transcript", "processed_transcript", "mRNA", "mrna"})
CDS_TYPES = frozenset({"CDS", "cds"})
CODON_TYPES = frozenset({"start_codon", "stop_codon"})
UTR_TYPES = frozenset({"5UTR", "3UTR", "UTR", "five_prime_UTR", "three_prime_UTR", "3'-UTR", "5'-UTR"})
EXON_TYPES = frozenset({"exon", "coding-exon"})
INTRON_TYPE = "intron"
GENE_TYPE = "gene"

DEFAULT_FILTER_TYPES = frozenset({"chromosome"})

# lowercased attribute keys, checked in order, when a record has no explicit name
DEFAULT_NAME_FIELDS = ("name", "alias", "id", "gene", "locus", "gene_name")

GFF3_ATTRIBUTE_DELIMITER = "="
GTF_ATTRIBUTE_DELIMITER = " "


class SchemaFormat(Enum):
    """The two supported annotation conventions. GFF3 expresses hierarchy through explicit ``Parent`` references;
    GTF groups records implicitly by a shared ``transcript_id``."""

    GFF3 = "gff3"
    GTF = "gtf"

    @staticmethod
    def from_value(value) -> "SchemaFormat":
        """``gff3`` selects GFF3. Any other value, including ``None``, selects GTF."""
        if isinstance(value, SchemaFormat):
            return value
        return SchemaFormat.GFF3 if value == SchemaFormat.GFF3.value else SchemaFormat.GTF

    @property
    def attribute_delimiter(self) -> str:
        """Separator between key and value inside one attribute entry"""
        return GFF3_ATTRIBUTE_DELIMITER if self == SchemaFormat.GFF3 else GTF_ATTRIBUTE_DELIMITER


class FeatureKind(Enum):
    """Classification of a record type by the role it plays in a transcript model."""

    TRANSCRIPT = "transcript"
    EXON = "exon"
    CDS = "cds"
    UTR = "utr"
    CODON = "codon"
    INTRON = "intron"
    GENE = "gene"
    OTHER = "other"

    @staticmethod
    def of(feature_type: Optional[str]) -> "FeatureKind":
        """Classify a record type. Unknown types, and missing types, are :attr:`OTHER`."""
        return _KIND_BY_TYPE.get(feature_type, FeatureKind.OTHER)

    @property
    def is_transcript_part(self) -> bool:
        """True for kinds that are attached to (or consumed by) a transcript rather than forming one"""
        return self in (FeatureKind.EXON, FeatureKind.CDS, FeatureKind.UTR, FeatureKind.CODON)


def _build_kind_table() -> Dict[str, FeatureKind]:
    table: Dict[str, FeatureKind] = {}
    synonyms: Dict[FeatureKind, FrozenSet[str]] = {
        FeatureKind.TRANSCRIPT: TRANSCRIPT_TYPES,
        FeatureKind.EXON: EXON_TYPES,
        FeatureKind.CDS: CDS_TYPES,
        FeatureKind.UTR: UTR_TYPES,
        FeatureKind.CODON: CODON_TYPES,
        FeatureKind.INTRON: frozenset({INTRON_TYPE}),
        FeatureKind.GENE: frozenset({GENE_TYPE}),
    }
    for kind, type_names in synonyms.items():
        for type_name in type_names:
            table[type_name] = kind
    return table


_KIND_BY_TYPE = _build_kind_table()
