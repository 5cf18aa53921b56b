"""
Object representation of a transcript under construction.

A :class:`TranscriptModel` starts as a copy of a seed record (an explicit transcript row, or for GTF the first
exon/CDS/UTR row of an implicit transcript) and grows as exon, CDS and UTR records are attached to it. Attached
records are copied before any merge marker is set on them, so the records handed to the combiner are never
modified, and an exon shared by two GFF3 transcripts is tracked independently in each.
"""
from typing import Any, Callable, Dict, List, Optional

from gffcombine.exc import TranscriptFinishedError
from gffcombine.feature.record import POPUP_SEPARATOR, FeatureRecord, PopupData, format_number


class TranscriptModel(FeatureRecord):
    """
    A transcript and its ordered exon list.

    ``exons`` holds exon records, plus CDS and UTR records that had no containing exon. CDS and UTR records that
    fall inside an exon are nested in that exon's ``children``. ``start``/``end`` and the coding span
    ``cd_start``/``cd_end`` only ever widen as records are added.

    ``gene`` is an optional reference to the gene record this transcript belongs to. It is used to describe the
    transcript and is never modified.
    """

    def __init__(self, seed: FeatureRecord):
        super().__init__(
            chr=seed.chr,
            start=seed.start,
            end=seed.end,
            type=seed.type,
            strand=seed.strand,
            id=seed.id,
            parent=seed.parent,
            name=seed.name,
            attribute_string=seed.attribute_string,
            delim=seed.delim,
        )
        self.exons: List[FeatureRecord] = []
        self.gene: Optional[FeatureRecord] = None
        self.finished = False

    def __str__(self):
        return (
            f"TranscriptModel({self.chr}:{self.start}-{self.end}:{self.strand}, id={self.id}, "
            f"exons={len(self.exons)}, cds={self.cd_start}-{self.cd_end})"
        )

    def _require_accumulating(self):
        if self.finished:
            raise TranscriptFinishedError(f"Cannot add records to finished transcript {self.id}")

    def _expand(self, record: FeatureRecord):
        self.start = min(self.start, record.start)
        self.end = max(self.end, record.end)

    def _find_containing_exon(self, record: FeatureRecord) -> Optional[FeatureRecord]:
        for exon in self.exons:
            if exon.contains(record):
                return exon
        return None

    def add_exon(self, exon: FeatureRecord):
        """Append an exon and widen this transcript to include it. Transcripts that are not explicitly present in
        the source file start out as their first record and grow from there."""
        self._require_accumulating()
        self.exons.append(exon.copy())
        self._expand(exon)

    def add_cds(self, cds: FeatureRecord):
        """
        Attach a CDS record.

        If an exon fully contains the CDS, the exon's coding span is widened and the CDS is nested under it; an
        exon can carry several coding fragments this way. Otherwise the CDS stands in as its own exon, which
        happens for GTF files that list CDS rows without exon rows.
        """
        self._require_accumulating()
        exon = self._find_containing_exon(cds)
        if exon is not None:
            exon.cd_start = cds.start if exon.cd_start is None else min(cds.start, exon.cd_start)
            exon.cd_end = cds.end if exon.cd_end is None else max(cds.end, exon.cd_end)
            if exon.children is None:
                exon.children = []
            exon.children.append(cds.copy())
        else:
            promoted = cds.copy()
            promoted.cd_start = cds.start
            promoted.cd_end = cds.end
            self.exons.append(promoted)

        self._expand(cds)
        self.cd_start = cds.start if self.cd_start is None else min(cds.start, self.cd_start)
        self.cd_end = cds.end if self.cd_end is None else max(cds.end, self.cd_end)

    def add_utr(self, utr: FeatureRecord):
        """
        Attach a UTR record.

        A UTR covering an entire exon marks the exon as untranslated. A UTR covering one end of an exon moves the
        exon's coding boundary on that side to the far edge of the UTR, so two flanking UTR records reconstruct the
        coding portion of a single exon. A UTR with no containing exon is added as an untranslated exon. The coding
        span of the transcript is left alone.
        """
        self._require_accumulating()
        exon = self._find_containing_exon(utr)
        if exon is not None:
            if utr.start == exon.start and utr.end == exon.end:
                exon.utr = True
            else:
                if utr.end < exon.end:
                    exon.cd_start = utr.end
                if utr.start > exon.start:
                    exon.cd_end = utr.start
            if exon.children is None:
                exon.children = []
            exon.children.append(utr.copy())
        else:
            untranslated = utr.copy()
            untranslated.utr = True
            self.exons.append(untranslated)

        self._expand(utr)

    def finish(self):
        """
        Sort exons by start and flag exons lying wholly outside the coding span as untranslated.

        Sources such as GTF mark CDS explicitly but not UTR, so this recovers the UTR exons. Safe to call more than
        once.
        """
        self.exons.sort(key=lambda e: e.start)
        if self.is_coding:
            for exon in self.exons:
                if exon.end < self.cd_start or exon.start > self.cd_end:
                    exon.utr = True
        self.finished = True

    def popup_data(self, position: int, number_formatter: Callable[[int], str] = format_number) -> PopupData:
        """
        Describe this transcript at ``position``: the gene first (if known), then the transcript itself, then every
        exon under ``position`` followed by the records nested in that exon.
        """
        data: PopupData = []
        if self.gene is not None:
            data.extend(self.gene.popup_data(position, number_formatter))
            data.append(POPUP_SEPARATOR)

        data.extend(super().popup_data(position, number_formatter))

        for exon in self.exons:
            if not exon.overlaps_position(position):
                continue
            data.append(POPUP_SEPARATOR)
            data.extend(exon.popup_data(position, number_formatter))
            for child in exon.children or []:
                data.append(POPUP_SEPARATOR)
                data.extend(child.popup_data(position, number_formatter))
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dict usable by :class:`gffcombine.io.models.FeatureRecordModel`."""
        vals = super().to_dict()
        vals["gene_id"] = self.gene.id if self.gene is not None else None
        vals["is_transcript"] = True
        return vals
