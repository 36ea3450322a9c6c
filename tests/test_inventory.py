import unittest

from salvo.domain.config import ORIENT_HORIZONTAL, ORIENT_VERTICAL
from salvo.domain.inventory import ShipInventory


class ShipInventoryTests(unittest.TestCase):
    def test_remaining_lengths_follow_fleet_order(self):
        inv = ShipInventory([5, 4, 3, 3, 2], 10)
        self.assertEqual(inv.remaining_lengths(), [5, 4, 3, 3, 2])
        self.assertFalse(inv.all_sunk)

    def test_record_sunk_takes_first_unsunk_of_length(self):
        inv = ShipInventory([3, 2, 3], 10)
        first = inv.record_sunk(3, [(0, 0), (0, 1), (0, 2)], ORIENT_HORIZONTAL)
        self.assertIs(first, inv.records[0])
        self.assertTrue(first.sunk)
        self.assertEqual(first.orientation, ORIENT_HORIZONTAL)
        self.assertEqual(inv.remaining_lengths(), [2, 3])

        second = inv.record_sunk(3, [(5, 5), (6, 5), (7, 5)], ORIENT_VERTICAL)
        self.assertIs(second, inv.records[2])
        self.assertEqual(inv.remaining_lengths(), [2])
        self.assertFalse(inv.has_unsunk(3))

    def test_record_sunk_without_match_raises(self):
        inv = ShipInventory([2], 10)
        with self.assertRaises(ValueError):
            inv.record_sunk(4, [(0, 0), (0, 1), (0, 2), (0, 3)], ORIENT_HORIZONTAL)
        inv.record_sunk(2, [(0, 0), (0, 1)], ORIENT_HORIZONTAL)
        self.assertTrue(inv.all_sunk)
        with self.assertRaises(ValueError):
            inv.record_sunk(2, [(4, 4), (4, 5)], ORIENT_HORIZONTAL)

    def test_neighbors_of_sunk_are_orthogonal(self):
        inv = ShipInventory([2], 4)
        inv.record_sunk(2, [(0, 1), (0, 2)], ORIENT_HORIZONTAL)
        self.assertEqual(inv.neighbors_of_sunk(2), {(0, 0), (0, 3), (1, 1), (1, 2)})
        self.assertEqual(inv.sunk_cells(), {(0, 1), (0, 2)})

    def test_neighbors_of_sunk_with_diagonals(self):
        inv = ShipInventory([1], 3)
        inv.record_sunk(1, [(1, 1)], "UNKNOWN")
        self.assertEqual(len(inv.neighbors_of_sunk(1)), 4)
        self.assertEqual(len(inv.neighbors_of_sunk(1, include_diagonals=True)), 8)

    def test_unsunk_length_has_no_neighbors(self):
        inv = ShipInventory([3], 5)
        self.assertEqual(inv.neighbors_of_sunk(3), set())

    def test_rejects_non_positive_lengths(self):
        with self.assertRaises(ValueError):
            ShipInventory([3, 0], 5)


if __name__ == "__main__":
    unittest.main()
