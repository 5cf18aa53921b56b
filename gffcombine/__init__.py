__version__ = "0.1.0"

from gffcombine.combiner import FeatureCombiner, combine_features_by_id  # noqa F401
from gffcombine.feature import FeatureKind, FeatureRecord, SchemaFormat, TranscriptModel  # noqa F401
from gffcombine.strand import Strand  # noqa F401
