import pytest

from gffcombine.feature.record import POPUP_SEPARATOR, FeatureRecord, PopupItem, format_number
from gffcombine.feature.types import FeatureKind
from gffcombine.strand import Strand


class TestFeatureRecord:
    def test_strand_symbol_converted(self):
        assert FeatureRecord("chr1", 0, 10, "exon", strand="-").strand == Strand.MINUS
        assert FeatureRecord("chr1", 0, 10, "exon", strand=Strand.PLUS).strand == Strand.PLUS
        assert FeatureRecord("chr1", 0, 10, "exon").strand is None

    def test_identity_semantics(self):
        a = FeatureRecord("chr1", 0, 10, "exon", id="e1")
        b = FeatureRecord("chr1", 0, 10, "exon", id="e1")
        assert a != b
        assert len({a, b}) == 2

    def test_copy_is_independent(self):
        child = FeatureRecord("chr1", 2, 4, "CDS")
        original = FeatureRecord("chr1", 0, 10, "exon", id="e1", children=[child])
        copied = original.copy()
        copied.start = -5
        copied.children.append(FeatureRecord("chr1", 6, 8, "CDS"))
        assert original.start == 0
        assert original.children == [child]
        assert copied.children[0] is child

    @pytest.mark.parametrize(
        "parent,expected",
        [
            (None, ()),
            ("", ()),
            ("   ", ()),
            ("tx1", ("tx1",)),
            (" tx1,tx2 ", ("tx1", "tx2")),
            ("tx1, ,tx2,", ("tx1", "tx2")),
        ],
    )
    def test_parents(self, parent, expected):
        assert FeatureRecord("chr1", 0, 10, "exon", parent=parent).parents() == expected

    @pytest.mark.parametrize(
        "attribute_string,delim,expected",
        [
            (None, "=", ()),
            ("ID=e1;Parent=tx1", "=", (("ID", "e1"), ("Parent", "tx1"))),
            # entries without a value are skipped one by one
            ("ID=e1;flag;;Note=a=b", "=", (("ID", "e1"), ("Note", "a=b"))),
            (
                'gene_id "g1"; transcript_id "t1"; tag "basic";',
                " ",
                (("gene_id", "g1"), ("transcript_id", "t1"), ("tag", "basic")),
            ),
        ],
    )
    def test_attributes(self, attribute_string, delim, expected):
        record = FeatureRecord("chr1", 0, 10, "exon", attribute_string=attribute_string, delim=delim)
        assert record.attributes() == expected

    @pytest.mark.parametrize(
        "name,attribute_string,expected",
        [
            ("ABC1", "gene=XYZ", "ABC1"),
            (None, "ID=e1;gene=XYZ", "e1"),
            (None, "gene=XYZ;Alias=A1", "A1"),
            (None, "note=x", None),
        ],
    )
    def test_display_name(self, name, attribute_string, expected):
        record = FeatureRecord("chr1", 0, 10, "exon", name=name, attribute_string=attribute_string)
        assert record.display_name == expected

    @pytest.mark.parametrize(
        "type,kind",
        [("mRNA", FeatureKind.TRANSCRIPT), ("coding-exon", FeatureKind.EXON), ("repeat_region", FeatureKind.OTHER)],
    )
    def test_kind(self, type, kind):
        assert FeatureRecord("chr1", 0, 10, type).kind == kind

    def test_contains(self):
        exon = FeatureRecord("chr1", 100, 200, "exon")
        assert exon.contains(FeatureRecord("chr1", 100, 200, "CDS"))
        assert exon.contains(FeatureRecord("chr1", 120, 150, "CDS"))
        assert not exon.contains(FeatureRecord("chr1", 90, 150, "CDS"))

    def test_popup_data(self):
        record = FeatureRecord(
            "chr1",
            1234566,
            1234999,
            "repeat_region",
            name="rep1",
            attribute_string="ID=rep1;name=rep1;rpt_family=Alu",
        )
        assert record.popup_data(1234600) == [
            PopupItem("name", "rep1"),
            PopupItem("type", "repeat_region"),
            PopupItem("ID", "rep1"),
            PopupItem("rpt_family", "Alu"),
            PopupItem("position", "chr1:1,234,567-1,234,999"),
        ]
        assert POPUP_SEPARATOR not in record.popup_data(0)

    def test_format_number(self):
        assert format_number(1) == "1"
        assert format_number(1234567) == "1,234,567"
