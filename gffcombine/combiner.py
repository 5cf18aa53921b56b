"""
Assemble flat GFF3/GTF records into transcript models.

The two formats express transcript structure differently. GTF has no hierarchy: every exon, CDS, UTR and codon row of
a transcript carries the same ``transcript_id``, which parsers expose as the record ``id``, and a transcript row is
optional. GFF3 links rows explicitly: exons name their transcripts in ``Parent`` (possibly several, comma separated),
and transcripts name their gene.

:class:`FeatureCombiner` folds the rows belonging to each transcript into a single
:class:`~gffcombine.feature.transcript.TranscriptModel` and passes every other row through untouched. The result is
sorted by start position with a stable sort, so equal starts keep their input order.
"""
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from gffcombine.feature.record import FeatureRecord
from gffcombine.feature.transcript import TranscriptModel
from gffcombine.feature.types import DEFAULT_FILTER_TYPES, FeatureKind, SchemaFormat

logger = logging.getLogger(__name__)


def _new_composite(first: FeatureRecord, second: FeatureRecord) -> FeatureRecord:
    composite = FeatureRecord(
        chr=second.chr,
        start=min(first.start, second.start),
        end=max(first.end, second.end),
        type=second.type,
        strand=second.strand,
        id=second.id,
        delim=second.delim,
        exons=[first, second],
    )
    if second.parent and second.parent.strip():
        composite.parent = second.parent
    return composite


def combine_features_by_id(features: Iterable[FeatureRecord]) -> List[FeatureRecord]:
    """
    Merge records that share an identifier on the same chromosome.

    GFF3 occasionally splits one logical feature across several rows sharing an ``ID``, with no hierarchy linking
    them. The first row with a given ``ID`` is kept as-is. The second replaces it with a new composite record
    spanning both, holding both rows in its ``exons`` list; the composite takes ``parent`` from the second row if
    that row declares one. Further rows are appended to the composite, widening it.

    Records without an identifier pass through. Every record or composite keeps the position of the first row that
    produced it. Input records are never modified.

    Args:
        features: Parsed records.

    Returns:
        A list of records with split features collapsed.
    """
    merged: List[FeatureRecord] = []
    slot_by_key: Dict[Tuple[str, str], int] = {}
    composite_slots: Set[int] = set()
    for feature in features:
        if feature.id is None:
            merged.append(feature)
            continue

        key = (feature.chr, feature.id)
        slot = slot_by_key.get(key)
        if slot is None:
            slot_by_key[key] = len(merged)
            merged.append(feature)
            continue

        stored = merged[slot]
        if slot in composite_slots:
            stored.start = min(stored.start, feature.start)
            stored.end = max(stored.end, feature.end)
            stored.exons.append(feature)
        elif stored.exons is not None:
            # an input record that already carries exons; extend a copy of it
            composite = stored.copy()
            composite.start = min(composite.start, feature.start)
            composite.end = max(composite.end, feature.end)
            composite.exons.append(feature)
            merged[slot] = composite
            composite_slots.add(slot)
        else:
            merged[slot] = _new_composite(stored, feature)
            composite_slots.add(slot)
    return merged


class FeatureCombiner:
    """
    Combine exon, CDS, UTR and codon records into the transcripts they belong to.

    Args:
        format: ``"gff3"`` selects parent/child assembly, after merging rows split by ``ID``. Any other value selects
            GTF assembly, which groups rows by their shared identifier.
        filter_types: Record types dropped before anything else happens. Defaults to ``{"chromosome"}``.
    """

    def __init__(self, format: Optional[str] = SchemaFormat.GFF3.value, filter_types: Optional[Iterable[str]] = None):
        self.format = SchemaFormat.from_value(format)
        self.filter_types = frozenset(DEFAULT_FILTER_TYPES if filter_types is None else filter_types)

    def __repr__(self):
        return f"FeatureCombiner(format={self.format.value}, filter_types={sorted(self.filter_types)})"

    def combine(self, features: Iterable[FeatureRecord]) -> List[FeatureRecord]:
        """
        Fold transcript parts into :class:`~gffcombine.feature.transcript.TranscriptModel` objects.

        Args:
            features: Parsed records, in file order.

        Returns:
            Transcript models and all unconsumed records, stable-sorted by start.
        """
        features = list(features)
        if self.format == SchemaFormat.GFF3:
            combined = self._combine_gff3(combine_features_by_id(features))
        else:
            combined = self._combine_gtf(features)
        combined.sort(key=lambda f: f.start)
        return combined

    def _filter(self, features: Iterable[FeatureRecord]) -> List[FeatureRecord]:
        return [f for f in features if f.type not in self.filter_types]

    @staticmethod
    def _attach(transcript: TranscriptModel, record: FeatureRecord):
        kind = record.kind
        if kind == FeatureKind.EXON:
            transcript.add_exon(record)
        elif kind == FeatureKind.CDS:
            transcript.add_cds(record)
        elif kind == FeatureKind.UTR:
            transcript.add_utr(record)
        # codons are recognized and consumed, but carry nothing the model uses

    @staticmethod
    def _finish(
        transcripts: Iterable[TranscriptModel],
        features: List[FeatureRecord],
        consumed: Set[FeatureRecord],
        leftovers: Optional[Dict[FeatureRecord, List[FeatureRecord]]] = None,
    ) -> List[FeatureRecord]:
        combined: List[FeatureRecord] = []
        for transcript in transcripts:
            transcript.finish()
            combined.append(transcript)
        n_transcripts = len(combined)
        others: List[FeatureRecord] = []
        n_consumed = 0
        for f in features:
            if f not in consumed:
                others.append(f)
                continue
            n_consumed += 1
            if leftovers is not None and f in leftovers:
                # rows of a partially attached composite that named no known transcript
                others.extend(leftovers[f])
        combined.extend(others)
        logger.info(f"Combined {n_consumed} records into {n_transcripts} transcripts")
        if logger.isEnabledFor(logging.DEBUG):
            for f in others:
                if f.kind.is_transcript_part:
                    logger.debug(f"Record {f} was not attached to any transcript")
        return combined

    def _combine_gtf(self, features: List[FeatureRecord]) -> List[FeatureRecord]:
        transcripts: Dict[str, TranscriptModel] = {}
        models: List[TranscriptModel] = []
        consumed: Set[FeatureRecord] = set()
        features = self._filter(features)

        def transcript_for(feature: FeatureRecord) -> TranscriptModel:
            transcript = transcripts.get(feature.id)
            if transcript is None:
                # GTF does not require an explicit transcript record
                logger.debug(f"Inferring transcript {feature.id} from {feature.type} record")
                transcript = TranscriptModel(feature)
                transcripts[feature.id] = transcript
                models.append(transcript)
            return transcript

        for f in features:
            if f.kind == FeatureKind.TRANSCRIPT and f.id is not None:
                transcript = TranscriptModel(f)
                transcripts[f.id] = transcript
                models.append(transcript)
                consumed.add(f)

        for f in features:
            if f.kind == FeatureKind.EXON and f.id:
                self._attach(transcript_for(f), f)
                consumed.add(f)

        for f in features:
            if f.kind in (FeatureKind.CDS, FeatureKind.UTR, FeatureKind.CODON) and f.id:
                self._attach(transcript_for(f), f)
                consumed.add(f)

        return self._finish(models, features, consumed)

    def _combine_gff3(self, features: List[FeatureRecord]) -> List[FeatureRecord]:
        genes: Dict[str, FeatureRecord] = {
            f.id: f for f in features if f.kind == FeatureKind.GENE and f.id is not None
        }
        transcripts: Dict[str, TranscriptModel] = {}
        models: List[TranscriptModel] = []
        consumed: Set[FeatureRecord] = set()
        leftovers: Dict[FeatureRecord, List[FeatureRecord]] = {}
        features = self._filter(features)

        for f in features:
            if f.kind == FeatureKind.TRANSCRIPT and f.id is not None:
                transcript = TranscriptModel(f)
                transcripts[f.id] = transcript
                models.append(transcript)
                consumed.add(f)
                gene = genes.get(f.parent) if f.parent is not None else None
                if gene is not None:
                    transcript.gene = gene
                    consumed.add(gene)

        def attach_to_parents(feature: FeatureRecord):
            # rows split by ID arrive as one composite; attach each row to the transcripts it names
            fragments = feature.exons if feature.exons is not None else [feature]
            unattached: List[FeatureRecord] = []
            for fragment in fragments:
                parents = fragment.parents() or feature.parents()
                attached = False
                for parent_id in parents:
                    transcript = transcripts.get(parent_id)
                    if transcript is not None:
                        self._attach(transcript, fragment)
                        attached = True
                if not attached:
                    unattached.append(fragment)
            if len(unattached) < len(fragments):
                consumed.add(feature)
                if unattached:
                    leftovers[feature] = unattached

        for f in features:
            if f.kind == FeatureKind.EXON:
                attach_to_parents(f)

        for f in features:
            if f.kind in (FeatureKind.CDS, FeatureKind.UTR, FeatureKind.CODON):
                attach_to_parents(f)

        # introns are implied by the exons; drop the ones that belong to a known transcript
        for f in features:
            if f.kind == FeatureKind.INTRON and any(p in transcripts for p in f.parents()):
                consumed.add(f)

        return self._finish(models, features, consumed, leftovers)
