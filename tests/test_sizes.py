import unittest
import numpy as np

from ishihara import PackingConfig, make_sizes


class TestMakeSizes(unittest.TestCase):
    def setUp(self):
        self.config = PackingConfig(width=200, height=200, rmin=2, rmax=12, rincr=1, rvar=0.5)

    # --- Test Never-Empty Guard ---

    def test_never_empty(self):
        """Every noise value in [0, 1] yields at least one radius."""
        configs = [
            self.config,
            PackingConfig(width=100, height=100, rmin=5, rmax=5, rvar=1),
            PackingConfig(width=100, height=100, rmin=1, rmax=40, rincr=7, rvar=0.01),
            PackingConfig(width=100, height=100, rmin=1, rmax=2, rincr=0.3, rvar=3.0),
        ]
        for config in configs:
            for value in np.linspace(0.0, 1.0, 51):
                with self.subTest(config=config, value=value):
                    self.assertGreater(len(make_sizes(config, value)), 0)

    def test_zero_variance_is_singleton(self):
        """rmin == rmax with rvar=1 always gives exactly [rmin]."""
        config = PackingConfig(width=100, height=100, rmin=5, rmax=5, rincr=1, rvar=1)
        for value in np.linspace(0.0, 1.0, 11):
            self.assertEqual(make_sizes(config, value), (5.0,))

    # --- Test Sequence Shape ---

    def test_full_noise_range(self):
        """Noise 1 reaches rmax as the exclusive upper bound."""
        sizes = make_sizes(self.config, 1.0)
        self.assertEqual(sizes, (6.0, 7.0, 8.0, 9.0, 10.0, 11.0))

    def test_zero_noise_collapses_to_rmin(self):
        """Noise 0 puts the upper bound at rmin, leaving one radius."""
        self.assertEqual(make_sizes(self.config, 0.0), (2.0,))

    def test_sizes_ascending_and_bounded(self):
        """Radii ascend by rincr and stay within [rmin, rmax]."""
        for value in np.linspace(0.0, 1.0, 21):
            sizes = make_sizes(self.config, value)
            self.assertTrue(all(self.config.rmin <= r <= self.config.rmax for r in sizes))
            steps = np.diff(sizes)
            self.assertTrue(np.allclose(steps, self.config.rincr))

    def test_large_rvar_pins_to_upper(self):
        """rvar above one clamps the lower bound to the upper bound."""
        config = PackingConfig(width=100, height=100, rmin=2, rmax=12, rincr=1, rvar=2.0)
        self.assertEqual(make_sizes(config, 0.5), (7.0,))

    def test_fractional_step_does_not_overshoot(self):
        """Rounding in the step never produces a radius at or past the upper bound."""
        config = PackingConfig(width=100, height=100, rmin=1.0, rmax=1.3, rincr=0.1, rvar=0.1)
        sizes = make_sizes(config, 1.0)
        self.assertLess(max(sizes), 1.3)
        self.assertEqual(len(sizes), 3)


if __name__ == '__main__':
    unittest.main()
