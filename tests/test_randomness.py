import os
import unittest
from unittest import mock

from cubetimer.scramble import generate_scramble
from cubetimer.util.randomness import env_seed, make_rng, resolve_seed


class SeedTests(unittest.TestCase):
    def test_env_seed(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "17"}):
            self.assertEqual(env_seed(), 17)
            self.assertEqual(resolve_seed(None), 17)
            self.assertEqual(resolve_seed(3), 3)
        with mock.patch.dict(os.environ, {"SEED": "abc"}):
            self.assertIsNone(env_seed())

    def test_unset(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(resolve_seed(None))

    def test_seeded_rngs_agree(self) -> None:
        self.assertEqual(generate_scramble(make_rng(9)), generate_scramble(make_rng(9)))


if __name__ == "__main__":
    unittest.main()
