import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")
from matplotlib import pyplot as plt

from kmeans_stepper import session
from kmeans_stepper.plotting import plot_state, save_snapshot, plot_trace
from kmeans_stepper.utils import load_config


class TestPlotting(unittest.TestCase):

    def setUp(self):
        self.cfg = load_config()
        self.state = session.initialize(self.cfg, session.make_rng(2))

    def tearDown(self):
        plt.close("all")

    def test_plot_state(self):
        ax = plot_state(self.state, self.cfg)
        self.assertEqual(ax.get_title(), "Iteration 0")
        self.assertEqual(len(ax.collections), 2)  # points, centroids
        self.assertEqual(ax.get_xlim(), (-1.0, 1.0))
        self.assertEqual(ax.get_ylim(), (-1.0, 1.0))
        self.assertEqual(len(ax.collections[0].get_offsets()), 20)
        self.assertEqual(len(ax.collections[1].get_offsets()), 3)

    def test_snapshot_written(self):
        state = session.step(self.state)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "frame.png")
            save_snapshot(state, self.cfg, path)
            self.assertTrue(os.path.isfile(path))
            self.assertGreater(os.path.getsize(path), 0)

    def test_trace_has_one_panel_per_state(self):
        states = [self.state]
        for _ in range(3):
            states.append(session.step(states[-1]))
        fig = plot_trace(states, self.cfg)
        self.assertEqual(len(fig.axes), 4)
        self.assertEqual(fig.axes[-1].get_title().split()[:2], ["Iteration", "3"])


if __name__ == "__main__":
    unittest.main()
