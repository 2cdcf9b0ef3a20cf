import pytest

from chain_state import orientation_before
from honeycomb_embedding import ORIGIN
from polygon_codes import (
    Polygon, PolygonClosureError, closing_turn, mirror_symmetry, polygon_code, reduce_polygon,
    reflect, reverse_bits, revert, rotate_left, rotate_right, rotational_symmetry, rotations,
    trace_polygon, turn_balance,
)

NAPHTHALENE_LENGTH = 10


@pytest.fixture
def closed_codes(enumeration):
    def _codes(length):
        return enumeration(length).polygon_codes
    return _codes


class TestConstruction:
    def test_hexagon(self):
        assert closing_turn(0, 6) == 0
        assert polygon_code(0, 6) == 0

    def test_non_closing_orientation_raises(self):
        # four right turns leave the bond at orientation 3
        with pytest.raises(PolygonClosureError):
            closing_turn(0b1111, 6)

    def test_closure_error_is_value_error(self):
        assert issubclass(PolygonClosureError, ValueError)

    @pytest.mark.parametrize("length", [6, 10, 12, 14])
    def test_closing_turn_follows_final_orientation(self, length, enumeration):
        for code in enumeration(length).polygon_codes:
            chain_code = code >> 1
            d = orientation_before(chain_code, length + 1, length) % 6
            assert d in (1, 5)
            assert closing_turn(chain_code, length) == code & 1 == (d == 1)

    @pytest.mark.parametrize("length", [6, 10, 12, 14])
    def test_codes_trace_closed_polygons(self, length, closed_codes):
        for code in closed_codes(length):
            assert code >> (length - 1) == 0    # implicit leading left turn
            points = trace_polygon(code, length)
            assert len(points) == length + 1
            assert points[-1] == ORIGIN
            assert len(set(points[:-1])) == length
            assert turn_balance(code, length) in (6, -6)


class TestRotationAndReversal:
    def test_rotate_right(self):
        assert rotate_right(0b000001, 6) == 0b100000
        assert rotate_right(0b000110, 6) == 0b000011

    def test_rotate_left(self):
        assert rotate_left(0b100000, 6) == 0b000001
        assert rotate_left(0b000011, 6) == 0b000110

    def test_rotations_inverse(self):
        for code in range(1 << 8):
            assert rotate_left(rotate_right(code, 8), 8) == code

    def test_full_cycle(self):
        rots = rotations(0b0010110111, 10)
        assert len(rots) == 10
        assert rotate_right(rots[-1], 10) == rots[0]

    def test_revert(self):
        assert revert(0, 6) == 0b111111
        assert revert(0b000001, 6) == 0b011111
        assert revert(revert(0b1101000110, 10), 10) == 0b1101000110

    def test_reverse_bits_and_reflect(self):
        assert reverse_bits(0b000011, 6) == 0b110000
        assert reflect(0b000011, 6) == 0b111100
        code = 0b1011001110
        assert reverse_bits(code, 10) == reflect(revert(code, 10), 10)


class TestReduce:
    def test_hexagon(self):
        assert reduce_polygon(0, 6) == 0
        assert reduce_polygon(0b111111, 6) == 0

    @pytest.mark.parametrize("length", [10, 12, 14])
    def test_idempotent(self, length, closed_codes):
        for code in closed_codes(length):
            reduced = reduce_polygon(code, length)
            assert reduce_polygon(reduced, length) == reduced

    @pytest.mark.parametrize("length", [10, 12, 14])
    def test_invariant_under_rotation_and_reversal(self, length, closed_codes):
        for code in closed_codes(length):
            reduced = reduce_polygon(code, length)
            assert reduce_polygon(rotate_right(code, length), length) == reduced
            assert reduce_polygon(rotate_left(code, length), length) == reduced
            assert reduce_polygon(revert(code, length), length) == reduced

    def test_rotated_polygon_still_closes(self, closed_codes):
        for code in closed_codes(14):
            for rotated in rotations(code, 14):
                points = trace_polygon(rotated, 14)
                assert points[-1] == ORIGIN
                assert len(set(points[:-1])) == 14

    def test_minimal(self, closed_codes):
        for code in closed_codes(12):
            reduced = reduce_polygon(code, 12)
            assert reduced <= min(rotations(code, 12))
            assert reduced <= min(rotations(revert(code, 12), 12))


class TestSymmetry:
    def test_hexagon(self):
        assert rotational_symmetry(0, 6) == 6
        assert mirror_symmetry(0, 6)

    def test_naphthalene(self, closed_codes):
        codes = {reduce_polygon(c, NAPHTHALENE_LENGTH) for c in closed_codes(NAPHTHALENE_LENGTH)}
        assert len(codes) == 1
        code = codes.pop()
        assert rotational_symmetry(code, NAPHTHALENE_LENGTH) == 2
        assert mirror_symmetry(code, NAPHTHALENE_LENGTH)

    def test_rotation_order_divides_length(self, closed_codes):
        for code in closed_codes(14):
            assert 14 % rotational_symmetry(code, 14) == 0

    @pytest.mark.parametrize("length", [12, 14, 16])
    def test_mirror_symmetry_matches_reflected_reduction(self, length, closed_codes):
        for code in closed_codes(length):
            same_as_mirror = reduce_polygon(reflect(code, length), length) == reduce_polygon(code, length)
            assert mirror_symmetry(code, length) == same_as_mirror

    def test_chiral_polygons_exist_at_16(self, closed_codes):
        assert not all(mirror_symmetry(c, 16) for c in closed_codes(16))


class TestPolygon:
    def test_from_chain_code(self):
        p = Polygon.from_chain_code(0, 6)
        assert p == Polygon(0, 6)
        assert str(p) == "000000"

    def test_methods(self):
        p = Polygon(0b0000010000, 10)
        assert p.rotated(10) == p
        assert p.rotated().code == rotate_right(p.code, 10)
        assert p.reverted().code == revert(p.code, 10)
        assert p.reflected().code == reflect(p.code, 10)
        assert p.reduced().code == reduce_polygon(p.code, 10)

    def test_congruence(self, closed_codes):
        codes = closed_codes(10)
        a = Polygon(codes[0], 10)
        assert a.is_congruent(a.rotated(3))
        assert a.is_congruent(a.reverted())
        assert not a.is_congruent(Polygon(0, 6))

    def test_hexagon_properties(self):
        p = Polygon(0, 6)
        assert p.rotational_symmetry() == 6
        assert p.has_mirror_symmetry()
        assert p.points()[-1] == ORIGIN
