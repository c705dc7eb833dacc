import unittest

from game import (
    ELEMENTALS,
    METALS,
    Marble,
    ZobristTable,
    deal_board,
    is_free,
    legal_moves,
    required_moves,
)


class TestDeal(unittest.TestCase):
    def test_given_seed_when_dealing_then_standard_marble_set(self):
        g = deal_board(seed=1)
        self.assertEqual(len(g.occupied()), 55)
        for metal in METALS:
            self.assertEqual(g.count(metal), 1)
        self.assertEqual(g.count(Marble.MERCURY), 5)
        for e in ELEMENTALS:
            self.assertEqual(g.count(e), 8)
        self.assertEqual(g.count(Marble.SALT), 4)
        self.assertEqual(g.count(Marble.VITAE), 4)
        self.assertEqual(g.count(Marble.MORS), 4)
        self.assertEqual(required_moves(g), 28)

    def test_given_same_seed_when_dealing_twice_then_identical_boards(self):
        table = ZobristTable(8)
        a = deal_board(seed=123, table=table)
        b = deal_board(seed=123, table=table)
        self.assertEqual(a, b)
        c = deal_board(seed=124, table=table)
        self.assertNotEqual(a.cells, c.cells)

    def test_given_dealt_board_when_inspecting_then_consistent_and_playable(self):
        g = deal_board(seed=9)
        self.assertEqual(g.hash, g.recompute_hash())
        self.assertTrue(legal_moves(g))
        self.assertTrue(any(is_free(g, p.x, p.y) for p in g.occupied()))
        for x in range(13):
            self.assertIs(g.get(x, 0), Marble.EMPTY)
            self.assertIs(g.get(x, 12), Marble.EMPTY)
            self.assertIs(g.get(0, x), Marble.EMPTY)
            self.assertIs(g.get(12, x), Marble.EMPTY)


if __name__ == '__main__':
    unittest.main(verbosity=2)
