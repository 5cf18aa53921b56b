"""
I/O exceptions.
"""
from gffcombine.exc import GFFCombineException


class GFFCombineIOException(GFFCombineException):
    pass


class InvalidInputError(GFFCombineIOException):
    pass


class UnsupportedFormatError(GFFCombineIOException):
    """
    Raised when records are requested in an annotation format other than GFF3 or GTF.
    """

    pass
