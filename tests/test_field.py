import unittest
import numpy as np

from ishihara import NoiseField, PackingConfig
from ishihara.field import DERIVED_SCALE_RANGE


class TestNoiseField(unittest.TestCase):
    def setUp(self):
        self.field = NoiseField(seed=42, scale_x=0.01, scale_y=0.01)
        self.points = [(x, y) for x in np.linspace(0, 500, 12) for y in np.linspace(0, 400, 9)]

    # --- Test Sampling ---

    def test_samples_in_unit_interval(self):
        """Every sample lies in [0, 1]."""
        for x, y in self.points:
            value = self.field.sample(x, y)
            self.assertGreaterEqual(value, 0.0)
            self.assertLessEqual(value, 1.0)

    def test_deterministic_per_seed(self):
        """Two fields built from the same seed agree everywhere."""
        twin = NoiseField(seed=42, scale_x=0.01, scale_y=0.01)
        for x, y in self.points:
            self.assertEqual(self.field.sample(x, y), twin.sample(x, y))

    def test_seed_changes_field(self):
        """A different seed gives a different field."""
        other = NoiseField(seed=43, scale_x=0.01, scale_y=0.01)
        diffs = [abs(self.field.sample(x, y) - other.sample(x, y)) for x, y in self.points]
        self.assertGreater(max(diffs), 0.0)

    def test_field_varies_across_canvas(self):
        """The field is not constant over the canvas."""
        values = {self.field.sample(x, y) for x, y in self.points}
        self.assertGreater(len(values), 1)

    # --- Test Scale Derivation ---

    def test_derived_scales(self):
        """Missing scales are drawn from the seed within the derived range."""
        derived = NoiseField(seed=7)
        low, high = DERIVED_SCALE_RANGE
        self.assertTrue(low <= derived.scale_x <= high)
        self.assertTrue(low <= derived.scale_y <= high)
        self.assertEqual(derived.scale_x, NoiseField(seed=7).scale_x)

    def test_from_config(self):
        """Config noise parameters flow into the field."""
        config = PackingConfig(noise_scale_x=0.02, noise_scale_y=None, noise_octaves=2, seed=-5)
        field = NoiseField.from_config(config)
        self.assertEqual(field.scale_x, 0.02)
        self.assertEqual(field.octaves, 2)
        self.assertTrue(DERIVED_SCALE_RANGE[0] <= field.scale_y <= DERIVED_SCALE_RANGE[1])

    # --- Test Gradient ---

    def test_gradient_is_forward_difference(self):
        """The gradient subtracts the base sample from unit-step neighbours."""
        x, y = 123.0, 77.0
        here = self.field.sample(x, y)
        dx, dy = self.field.gradient(x, y)
        self.assertAlmostEqual(dx, self.field.sample(x + 1, y) - here)
        self.assertAlmostEqual(dy, self.field.sample(x, y + 1) - here)


if __name__ == '__main__':
    unittest.main()
