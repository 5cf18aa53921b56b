"""
Test merging GFF3 rows that were split across lines sharing one ``ID``.
"""
from gffcombine.combiner import FeatureCombiner, combine_features_by_id
from gffcombine.feature.record import FeatureRecord


def gff(start, end, type="match_part", id=None, parent=None, chr="chr1"):
    return FeatureRecord(chr, start, end, type, strand="+", id=id, parent=parent)


class TestCombineFeaturesById:
    def test_unique_ids_unchanged(self):
        records = [gff(0, 10, id="a"), gff(20, 30), gff(5, 15, id="b")]
        assert combine_features_by_id(records) == records

    def test_two_rows_promoted_to_composite(self):
        first = gff(100, 200, id="m1")
        second = gff(300, 400, "match", id="m1", parent="p1")
        merged = combine_features_by_id([first, second])
        assert len(merged) == 1
        composite = merged[0]
        assert composite is not first and composite is not second
        assert (composite.start, composite.end) == (100, 400)
        assert (composite.id, composite.type, composite.parent) == ("m1", "match", "p1")
        assert composite.exons == [first, second]
        assert (first.start, first.end) == (100, 200)
        assert first.exons is None

    def test_blank_parent_not_copied(self):
        merged = combine_features_by_id([gff(100, 200, id="m1", parent="p1"), gff(300, 400, id="m1", parent=" ")])
        assert merged[0].parent is None

    def test_later_rows_extend_composite(self):
        rows = [gff(300, 400, id="m1"), gff(500, 600, id="m1"), gff(50, 80, id="m1")]
        merged = combine_features_by_id(rows)
        assert len(merged) == 1
        assert (merged[0].start, merged[0].end) == (50, 600)
        assert merged[0].exons == rows

    def test_ids_scoped_by_chromosome(self):
        records = [gff(0, 10, id="a", chr="chr1"), gff(0, 10, id="a", chr="chr2")]
        assert combine_features_by_id(records) == records

    def test_composite_keeps_first_position(self):
        a1 = gff(100, 200, id="a")
        other = gff(0, 10)
        b = gff(50, 60, id="b")
        a2 = gff(300, 400, id="a")
        merged = combine_features_by_id([a1, other, b, a2])
        assert merged[1:] == [other, b]
        assert merged[0].exons == [a1, a2]

    def test_input_with_exons_not_mutated(self):
        part = gff(100, 150, id="x")
        carrier = FeatureRecord("chr1", 100, 200, "match", id="m1", exons=[part])
        extra = gff(300, 400, id="m1")
        merged = combine_features_by_id([carrier, extra])
        assert merged[0] is not carrier
        assert merged[0].exons == [part, extra]
        assert (merged[0].start, merged[0].end) == (100, 400)
        assert carrier.exons == [part]
        assert carrier.end == 200

    def test_unattached_composite_passes_through(self):
        rows = [gff(100, 200, id="m1"), gff(300, 400, id="m1")]
        combined = FeatureCombiner().combine(rows)
        assert len(combined) == 1
        assert combined[0].exons == rows

    def test_gtf_does_not_merge_by_id(self):
        rows = [gff(100, 200, id="m1"), gff(300, 400, id="m1")]
        assert FeatureCombiner(format="gtf").combine(rows) == rows
