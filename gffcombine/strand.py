from enum import Enum


class Strand(Enum):
    PLUS = 1
    MINUS = -1
    UNSTRANDED = 0

    def __str__(self):
        return self.to_symbol()

    @staticmethod
    def from_symbol(value: str) -> "Strand":
        """Converts the strand column of a GFF3/GTF row to a Strand. Both ``.`` (unstranded) and ``?`` (unknown)
        are treated as unstranded."""
        if value == "+":
            return Strand.PLUS
        if value == "-":
            return Strand.MINUS
        if value in (".", "?"):
            return Strand.UNSTRANDED
        raise ValueError("{} is not a valid string representation of a strand".format(value))

    def to_symbol(self) -> str:
        if self == Strand.PLUS:
            return "+"
        if self == Strand.MINUS:
            return "-"
        return "."
