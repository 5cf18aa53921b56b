"""
Feature records and the transcript models they are assembled into.
"""

from gffcombine.feature.types import FeatureKind, SchemaFormat  # noqa F401
from gffcombine.feature.record import FeatureRecord, PopupItem, POPUP_SEPARATOR, format_number  # noqa F401
from gffcombine.feature.transcript import TranscriptModel  # noqa F401
