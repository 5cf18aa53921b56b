class GFFCombineException(Exception):
    """
    Base exception class for gffcombine.
    """

    pass


class TranscriptFinishedError(GFFCombineException):
    """
    Raised when a child record is added to a :class:`~gffcombine.feature.transcript.TranscriptModel` that has
    already been finished. Finished transcripts can only be inspected.
    """

    pass
