import unittest

from game import (
    Grid,
    Marble,
    Move,
    ZobristTable,
    applied,
    apply_move,
    cells_vacated,
    deal_board,
    find_move,
    free_cells,
    is_free,
    is_legal,
    legal_moves,
    neighbors,
    required_moves,
    undo_move,
)

# Cells far enough apart that none of them touch.
WEST = (3, 6)
EAST = (9, 6)
NORTH = (6, 3)
SOUTH = (6, 9)
CENTER = (6, 6)


def _mk_grid(*cells):
    g = Grid(ZobristTable(3))
    for (x, y), marble in cells:
        g.place(x, y, marble)
    return g


def _kinds(move):
    return {p.marble for p in move.cells()}


class TestFreeness(unittest.TestCase):
    def test_given_centre_when_listing_neighbors_then_cyclic_hex_order(self):
        self.assertEqual(neighbors(6, 6), [(7, 6), (7, 5), (6, 5), (5, 6), (5, 7), (6, 7)])

    def test_given_three_consecutive_empty_neighbors_when_checking_then_free(self):
        # W, SW, SE occupied; E, NE, NW empty
        g = _mk_grid((CENTER, Marble.AIR), ((5, 6), Marble.FIRE), ((5, 7), Marble.FIRE), ((6, 7), Marble.FIRE))
        self.assertTrue(is_free(g, 6, 6))

    def test_given_empty_run_wrapping_past_last_neighbor_when_checking_then_free(self):
        # NW, W, SW occupied; SE, E, NE empty (run wraps around the cycle)
        g = _mk_grid((CENTER, Marble.AIR), ((6, 5), Marble.FIRE), ((5, 6), Marble.FIRE), ((5, 7), Marble.FIRE))
        self.assertTrue(is_free(g, 6, 6))

    def test_given_only_two_consecutive_empty_neighbors_when_checking_then_not_free(self):
        # E and W occupied leaves two runs of two
        g = _mk_grid((CENTER, Marble.AIR), ((7, 6), Marble.FIRE), ((5, 6), Marble.FIRE))
        self.assertFalse(is_free(g, 6, 6))
        # Alternating occupied/empty never yields a run of three
        g2 = _mk_grid((CENTER, Marble.AIR), ((7, 5), Marble.FIRE), ((5, 6), Marble.FIRE), ((6, 7), Marble.FIRE))
        self.assertFalse(is_free(g2, 6, 6))

    def test_given_empty_or_isolated_cells_when_checking_then_expected(self):
        g = _mk_grid((CENTER, Marble.SALT))
        self.assertFalse(is_free(g, 7, 7))
        self.assertTrue(is_free(g, 6, 6))
        self.assertEqual([p.coord for p in free_cells(g)], [CENTER])

    def test_given_marble_on_hexagon_edge_when_checking_then_border_counts_as_empty(self):
        # Top-left corner of the hexagon with both in-board neighbours filled
        g = _mk_grid(((6, 1), Marble.AIR), ((7, 1), Marble.FIRE), ((6, 2), Marble.FIRE), ((5, 2), Marble.FIRE))
        self.assertTrue(is_free(g, 6, 1))


class TestMetalRules(unittest.TestCase):
    def test_given_lead_and_tin_free_when_generating_then_only_lead_moves(self):
        g = _mk_grid((WEST, Marble.LEAD), (CENTER, Marble.TIN), (EAST, Marble.MERCURY), (NORTH, Marble.MERCURY))
        moves = legal_moves(g)
        self.assertEqual(len(moves), 2)
        for m in moves:
            self.assertEqual(_kinds(m), {Marble.LEAD, Marble.MERCURY})
            self.assertEqual(m.b.coord, WEST)
        # Once Lead is gone, Tin becomes eligible
        apply_move(g, moves[0])
        after = legal_moves(g)
        self.assertEqual(len(after), 1)
        self.assertEqual(_kinds(after[0]), {Marble.TIN, Marble.MERCURY})

    def test_given_blocked_lead_when_generating_then_no_other_metal_eligible(self):
        cells = [(CENTER, Marble.LEAD), ((3, 9), Marble.MERCURY)]
        cells += [(n, Marble.TIN) for n in neighbors(6, 6)]
        g = _mk_grid(*cells)
        self.assertFalse(is_free(g, 6, 6))
        self.assertEqual(legal_moves(g), [])

    def test_given_several_free_lead_when_generating_then_mercury_pairs_with_first(self):
        g = _mk_grid((WEST, Marble.LEAD), (EAST, Marble.LEAD), (NORTH, Marble.MERCURY))
        moves = legal_moves(g)
        self.assertEqual(len(moves), 1)
        self.assertEqual(moves[0].a.coord, NORTH)
        self.assertEqual(moves[0].b.coord, WEST)

    def test_given_lone_gold_when_generating_then_single_self_paired_move(self):
        g = _mk_grid((CENTER, Marble.GOLD))
        moves = legal_moves(g)
        self.assertEqual(len(moves), 1)
        m = moves[0]
        self.assertEqual(m.a, m.b)
        self.assertTrue(m.is_gold)
        self.assertEqual(cells_vacated(m), 1)
        apply_move(g, m)
        self.assertTrue(g.is_cleared())

    def test_given_gold_with_silver_present_when_generating_then_no_gold_move(self):
        g = _mk_grid((CENTER, Marble.GOLD), (WEST, Marble.SILVER))
        self.assertEqual(legal_moves(g), [])
        g.place(EAST[0], EAST[1], Marble.MERCURY)
        moves = legal_moves(g)
        self.assertEqual(len(moves), 1)
        self.assertEqual(_kinds(moves[0]), {Marble.SILVER, Marble.MERCURY})

    def test_given_mercury_and_gold_only_when_generating_then_mercury_cannot_take_gold(self):
        g = _mk_grid((CENTER, Marble.GOLD), (WEST, Marble.MERCURY))
        moves = legal_moves(g)
        self.assertEqual(len(moves), 1)
        self.assertTrue(moves[0].is_gold)

    def test_given_gold_surrounded_when_generating_then_only_ring_moves(self):
        cells = [(CENTER, Marble.GOLD)] + [(n, Marble.AIR) for n in neighbors(6, 6)]
        g = _mk_grid(*cells)
        moves = legal_moves(g)
        self.assertEqual(len(moves), 15)  # every pair of the six Air
        self.assertFalse(any(m.is_gold for m in moves))


class TestOtherRules(unittest.TestCase):
    def test_given_two_air_and_one_fire_when_generating_then_single_air_pair(self):
        g = _mk_grid((WEST, Marble.AIR), (EAST, Marble.AIR), (NORTH, Marble.FIRE))
        moves = legal_moves(g)
        self.assertEqual(len(moves), 1)
        self.assertEqual(_kinds(moves[0]), {Marble.AIR})

    def test_given_mors_and_vitae_when_generating_then_full_cross_product(self):
        g = _mk_grid((WEST, Marble.MORS), (EAST, Marble.MORS), (NORTH, Marble.VITAE))
        moves = legal_moves(g)
        self.assertEqual(len(moves), 2)
        for m in moves:
            self.assertIs(m.a.marble, Marble.MORS)
            self.assertIs(m.b.marble, Marble.VITAE)

    def test_given_salts_and_elemental_when_generating_then_salt_pair_then_salt_elemental(self):
        g = _mk_grid((WEST, Marble.SALT), (EAST, Marble.SALT), (NORTH, Marble.FIRE))
        moves = legal_moves(g)
        self.assertEqual([m.coords() for m in moves], [
            (WEST, EAST),
            (WEST, NORTH),
            (EAST, NORTH),
        ])

    def test_given_non_pairing_kinds_when_generating_then_no_moves(self):
        g = _mk_grid((WEST, Marble.MERCURY), (EAST, Marble.VITAE), (NORTH, Marble.AIR), (SOUTH, Marble.FIRE))
        self.assertEqual(legal_moves(g), [])

    def test_given_coordinates_when_finding_move_then_order_insensitive(self):
        g = _mk_grid((WEST, Marble.SALT), (EAST, Marble.SALT), (CENTER, Marble.GOLD))
        m = find_move(g, EAST, WEST)
        self.assertIsNotNone(m)
        assert m is not None
        self.assertEqual(set(m.coords()), {WEST, EAST})
        self.assertTrue(is_legal(g, m))
        self.assertIsNone(find_move(g, WEST, CENTER))
        gold = find_move(g, CENTER)
        self.assertIsNotNone(gold)
        self.assertEqual(find_move(g, CENTER, CENTER), gold)


class TestApplyUndo(unittest.TestCase):
    def test_given_dealt_board_when_applying_and_undoing_each_move_then_grid_and_hash_restored(self):
        g = deal_board(seed=5, table=ZobristTable(9))
        moves = legal_moves(g)
        self.assertTrue(moves)
        for m in moves:
            before = g.copy()
            h = g.hash
            apply_move(g, m)
            self.assertNotEqual(g.hash, h)
            self.assertEqual(len(g.occupied()), len(before.occupied()) - cells_vacated(m))
            undo_move(g, m)
            self.assertEqual(g, before)
            self.assertEqual(g.hash, h)
            self.assertEqual(g.hash, g.recompute_hash())

    def test_given_error_inside_block_when_move_applied_then_still_undone(self):
        g = _mk_grid((WEST, Marble.AIR), (EAST, Marble.AIR))
        before = g.copy()
        m = legal_moves(g)[0]
        with self.assertRaises(RuntimeError):
            with applied(g, m):
                self.assertTrue(g.is_cleared())
                raise RuntimeError('boom')
        self.assertEqual(g, before)

    def test_given_boards_when_counting_required_moves_then_pairs_plus_gold(self):
        self.assertEqual(required_moves(Grid()), 0)
        self.assertEqual(required_moves(_mk_grid((CENTER, Marble.MORS))), 1)
        self.assertEqual(required_moves(_mk_grid((CENTER, Marble.GOLD), (WEST, Marble.AIR), (EAST, Marble.AIR))), 2)
        self.assertEqual(required_moves(deal_board(seed=2)), 28)

    def test_given_move_when_built_by_hand_then_value_semantics(self):
        g = _mk_grid((WEST, Marble.AIR), (EAST, Marble.AIR))
        a, b = g.occupied()
        self.assertEqual(Move(a, b), legal_moves(g)[0])


if __name__ == '__main__':
    unittest.main(verbosity=2)
