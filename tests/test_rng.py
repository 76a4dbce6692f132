import unittest

from codemaze.maze.rng import LCG_MODULUS, SeededRandom, hash_seed, seed_random


class HashSeedTests(unittest.TestCase):
    def test_empty_seed_hashes_to_zero(self) -> None:
        self.assertEqual(hash_seed(""), 0)

    def test_matches_polynomial_rolling_hash(self) -> None:
        self.assertEqual(hash_seed("a"), 97)
        self.assertEqual(hash_seed("ab"), 97 * 31 + 98)
        self.assertEqual(hash_seed("hello"), 99162322)

    def test_wraps_to_signed_32_bit(self) -> None:
        self.assertEqual(hash_seed("polygenelubricants"), -(2**31))

    def test_astral_characters_hash_as_surrogate_pairs(self) -> None:
        high, low = 0xD83D, 0xDE00
        self.assertEqual(hash_seed("\U0001F600"), high * 31 + low)


class SeededRandomTests(unittest.TestCase):
    def test_empty_seed_produces_known_sequence(self) -> None:
        rng = SeededRandom("")
        self.assertAlmostEqual(rng.next(), 49297 / LCG_MODULUS)
        self.assertAlmostEqual(rng.next(), 165494 / LCG_MODULUS)

    def test_single_character_seed(self) -> None:
        self.assertAlmostEqual(seed_random("a").next(), 18374 / LCG_MODULUS)

    def test_same_seed_reproduces_sequence(self) -> None:
        first = SeededRandom("maze-42")
        second = SeededRandom("maze-42")
        self.assertEqual([first.next() for _ in range(50)], [second.next() for _ in range(50)])

    def test_instances_do_not_share_state(self) -> None:
        first = SeededRandom("shared")
        expected = first.next()
        first.next()
        second = SeededRandom("shared")
        self.assertEqual(second.next(), expected)

    def test_values_stay_in_unit_interval_for_negative_hashes(self) -> None:
        rng = SeededRandom("polygenelubricants")
        self.assertLess(rng.state, 0)
        for _ in range(1000):
            value = rng.next()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_shuffle_is_deterministic_permutation(self) -> None:
        items = list(range(10))
        first, second = list(items), list(items)
        SeededRandom("shuffle").shuffle(first)
        SeededRandom("shuffle").shuffle(second)
        self.assertEqual(first, second)
        self.assertEqual(sorted(first), items)

    def test_randbelow_rejects_empty_range(self) -> None:
        rng = SeededRandom("x")
        with self.assertRaises(ValueError):
            rng.randbelow(0)
        self.assertTrue(all(0 <= rng.randbelow(4) < 4 for _ in range(100)))

    def test_seed_must_be_string(self) -> None:
        with self.assertRaises(TypeError):
            SeededRandom(42)


if __name__ == "__main__":
    unittest.main()
