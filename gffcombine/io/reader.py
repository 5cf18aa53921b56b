"""
Read GFF3/GTF rows into :class:`~gffcombine.feature.record.FeatureRecord` objects by wrapping :mod:`gffutils`.

Tokenizing GFF3/GTF text is left to :mod:`gffutils`, which is an optional dependency (``pip install gffcombine[io]``).
Rows are streamed with :class:`gffutils.DataIterator`; no database is built, so records come out in file order with
no inferred genes or transcripts, which is what :class:`~gffcombine.combiner.FeatureCombiner` expects.
"""
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from gffcombine.feature.record import FeatureRecord
from gffcombine.feature.types import SchemaFormat
from gffcombine.io.exc import UnsupportedFormatError


def _first(attributes, key: str) -> Optional[str]:
    values = attributes.get(key)
    return values[0] if values else None


def _attribute_string(attributes, fmt: SchemaFormat) -> str:
    if fmt == SchemaFormat.GFF3:
        return ";".join(f"{key}={','.join(values)}" for key, values in attributes.items())
    return "; ".join(f'{key} "{value}"' for key, values in attributes.items() for value in values)


def _require_format(format: Union[str, SchemaFormat]) -> SchemaFormat:
    value = format.value if isinstance(format, SchemaFormat) else format
    if value not in {f.value for f in SchemaFormat}:
        raise UnsupportedFormatError(f"Cannot read annotation format {format}; expected one of gff3, gtf")
    return SchemaFormat(value)


def records_from_gffutils(features: Iterable, format: Union[str, SchemaFormat]) -> Iterator[FeatureRecord]:
    """
    Convert :class:`gffutils.feature.Feature` objects to records.

    Coordinates are converted to 0-based half-open. For GFF3 the record ``id`` is the ``ID`` attribute, ``parent``
    is the comma-joined ``Parent`` attribute and ``name`` is the ``Name`` attribute. For GTF the record ``id`` is the
    ``transcript_id``, which is what groups the rows of one transcript, and ``name`` is the ``gene_name``; GTF records
    have no parent. Rows without a naming attribute of their format fall back to
    :attr:`~gffcombine.feature.record.FeatureRecord.display_name`, so a GFF3 row with only an ``Alias`` or ``ID`` is
    still named.

    Args:
        features: Iterable of :mod:`gffutils` features.
        format: ``gff3`` or ``gtf``.

    Yields:
        One record per feature, in input order.
    """
    fmt = _require_format(format)
    for feature in features:
        attributes = feature.attributes
        if fmt == SchemaFormat.GFF3:
            feature_id = _first(attributes, "ID")
            parents = attributes.get("Parent")
            parent = ",".join(parents) if parents else None
            name = _first(attributes, "Name")
        else:
            feature_id = _first(attributes, "transcript_id")
            parent = None
            name = _first(attributes, "gene_name")
        record = FeatureRecord(
            chr=feature.seqid,
            start=feature.start - 1,
            end=feature.end,
            type=feature.featuretype,
            strand=feature.strand,
            id=feature_id,
            parent=parent,
            name=name,
            attribute_string=_attribute_string(attributes, fmt),
            delim=fmt.attribute_delimiter,
        )
        if record.name is None:
            record.name = record.display_name
        yield record


def read_records(
    data: Union[str, Path], format: Union[str, SchemaFormat], from_string: bool = False
) -> List[FeatureRecord]:
    """
    Read every row of a GFF3 or GTF file.

    Args:
        data: Path to a local file, or the text itself if ``from_string`` is set.
        format: ``gff3`` or ``gtf``.
        from_string: Treat ``data`` as file contents.

    Returns:
        Records in file order.
    """
    fmt = _require_format(format)
    import gffutils

    rows = gffutils.DataIterator(str(data), from_string=from_string)
    return list(records_from_gffutils(rows, fmt))
