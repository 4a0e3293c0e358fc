import unittest

from game import (
    Board,
    BLACK,
    WHITE,
    EMPTY,
    opponent,
    in_bounds,
    flippable_lines,
    legal_moves,
    score,
)


def _mk_board(rows):
    return Board.from_rows([list(r) for r in rows])


EMPTY_ROWS = ["........"] * 8


class TestGameUnit(unittest.TestCase):
    def test_given_initial_board_when_reading_cells_then_standard_center_layout(self):
        b = Board.initial()
        self.assertEqual(b.at(3, 3), WHITE)
        self.assertEqual(b.at(4, 4), WHITE)
        self.assertEqual(b.at(3, 4), BLACK)
        self.assertEqual(b.at(4, 3), BLACK)
        self.assertEqual(b.count(EMPTY), 60)
        self.assertEqual(b.index(3, 4), 28)

    def test_given_out_of_range_coords_when_accessing_then_index_error(self):
        b = Board.initial()
        self.assertFalse(in_bounds(8, 0))
        self.assertFalse(in_bounds(0, -1))
        with self.assertRaises(IndexError):
            b.at(8, 0)
        with self.assertRaises(IndexError):
            b.at(-1, 3)

    def test_given_bad_shapes_or_tags_when_building_board_then_value_error(self):
        with self.assertRaises(ValueError):
            Board(grid=tuple("." * 63))
        with self.assertRaises(ValueError):
            Board(grid=tuple("." * 63 + "X"))
        with self.assertRaises(ValueError):
            Board.from_rows(["........"] * 7)
        with self.assertRaises(ValueError):
            Board.from_rows(["......."] + ["........"] * 7)

    def test_given_rows_when_roundtrip_then_equal(self):
        b = Board.initial()
        self.assertEqual(Board.from_rows(b.to_rows()), b)

    def test_given_players_when_asking_opponent_then_other_color(self):
        self.assertEqual(opponent(BLACK), WHITE)
        self.assertEqual(opponent(WHITE), BLACK)
        with self.assertRaises(ValueError):
            opponent(EMPTY)

    def test_given_board_when_pretty_then_marks_and_one_based_headers(self):
        b = Board.initial()
        txt = b.pretty({(2, 3), (3, 3)})
        lines = txt.splitlines()
        self.assertEqual(lines[0], "  1 2 3 4 5 6 7 8")
        self.assertEqual(lines[3], "3 . . . * . . . .")
        # occupied cells are never marked
        self.assertEqual(lines[4], "4 . . . W B . . .")
        zero = b.pretty(one_based=False)
        self.assertTrue(zero.splitlines()[1].startswith("0 "))

    def test_given_lines_in_several_directions_when_flipping_then_union_in_row_major_order(self):
        rows = [
            "........",
            "...B....",
            "...W....",
            "....WB..",
            "....W...",
            ".....B..",
            "........",
            "........",
        ]
        b = _mk_board(rows)
        self.assertEqual(flippable_lines(b, (3, 3), BLACK), [(2, 3), (3, 4), (4, 4)])
        self.assertEqual(flippable_lines(b, (3, 3), WHITE), [])

    def test_given_run_reaching_edge_when_flipping_then_no_wraparound(self):
        rows = list(EMPTY_ROWS)
        rows[0] = ".....WW."
        rows[1] = "B......."
        b = _mk_board(rows)
        # (0,7) is empty: the run is not closed; (1,0) follows in memory but is not on the ray
        self.assertEqual(flippable_lines(b, (0, 4), BLACK), [])
        rows[0] = ".....WWW"
        b2 = _mk_board(rows)
        self.assertEqual(flippable_lines(b2, (0, 4), BLACK), [])
        self.assertNotIn((0, 4), legal_moves(b2, BLACK))

    def test_given_closed_run_when_flipping_then_whole_run_flips(self):
        rows = list(EMPTY_ROWS)
        rows[0] = "....WWWB"
        b = _mk_board(rows)
        self.assertEqual(flippable_lines(b, (0, 3), BLACK), [(0, 4), (0, 5), (0, 6)])
        self.assertEqual(legal_moves(b, BLACK), [(0, 3)])

    def test_given_occupied_or_off_board_position_when_flipping_then_empty(self):
        b = Board.initial()
        self.assertEqual(flippable_lines(b, (3, 3), BLACK), [])
        self.assertEqual(flippable_lines(b, (-1, 3), BLACK), [])
        self.assertEqual(flippable_lines(b, (8, 8), WHITE), [])

    def test_given_board_when_scoring_then_counts_sum_to_64(self):
        s = score(Board.initial())
        self.assertEqual((s.black, s.white, s.empty), (2, 2, 60))
        self.assertEqual(s.black + s.white + s.empty, 64)


if __name__ == '__main__':
    unittest.main(verbosity=2)
