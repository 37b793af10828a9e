import unittest

import numpy as np

from kmeans_stepper import kmean, session


class TestAssignClusters(unittest.TestCase):

    def setUp(self):
        rng = np.random.default_rng(42)
        self.points = rng.uniform(-1, 1, size=(20, 2))
        self.centroids = rng.uniform(-1, 1, size=(3, 2))

    def test_every_label_is_a_valid_index(self):
        labels = kmean.assign_clusters(self.points, self.centroids)
        self.assertEqual(len(labels), 20)
        self.assertTrue(np.all((labels >= 0) & (labels < 3)))

    def test_each_point_gets_its_nearest_centroid(self):
        labels = kmean.assign_clusters(self.points, self.centroids)
        for point, label in zip(self.points, labels):
            own = kmean.distance(point, self.centroids[label])
            for centroid in self.centroids:
                self.assertLessEqual(own, kmean.distance(point, centroid))

    def test_tie_goes_to_lower_index(self):
        points = np.array([[0.0, 0.0]])
        centroids = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0]])
        self.assertEqual(kmean.assign_clusters(points, centroids)[0], 0)

        centroids = np.array([[0.9, 0.9], [0.0, 0.5], [0.5, 0.0]])
        self.assertEqual(kmean.assign_clusters(points, centroids)[0], 1)

    def test_does_not_touch_inputs(self):
        points, centroids = self.points.copy(), self.centroids.copy()
        kmean.assign_clusters(self.points, self.centroids)
        np.testing.assert_array_equal(points, self.points)
        np.testing.assert_array_equal(centroids, self.centroids)

    def test_distance(self):
        self.assertAlmostEqual(kmean.distance((0.0, 0.0), (3.0, 4.0)), 5.0)
        self.assertEqual(kmean.distance((0.2, -0.3), (0.2, -0.3)), 0.0)


class TestUpdateCentroids(unittest.TestCase):

    def test_centroid_is_mean_of_members(self):
        rng = np.random.default_rng(3)
        points = rng.uniform(-1, 1, size=(20, 2))
        centroids = points[:3].copy()
        labels = kmean.assign_clusters(points, centroids)
        updated = kmean.update_centroids(points, labels, centroids)
        for i in range(3):
            members = points[labels == i]
            if len(members) == 0:
                continue
            self.assertAlmostEqual(updated[i, 0], members[:, 0].mean())
            self.assertAlmostEqual(updated[i, 1], members[:, 1].mean())

    def test_empty_cluster_keeps_exact_coordinates(self):
        points = np.array([[0.1, 0.2], [0.3, -0.1], [-0.2, 0.05]])
        centroids = np.array([[0.0, 0.0], [0.123456789, -0.987654321]])
        labels = np.array([0, 0, 0])
        updated = kmean.update_centroids(points, labels, centroids)
        self.assertEqual(updated[1].tobytes(), centroids[1].tobytes())

    def test_input_centroids_are_not_mutated(self):
        points = np.array([[1.0, 1.0], [3.0, 3.0]])
        centroids = np.array([[0.0, 0.0]])
        kmean.update_centroids(points, np.array([0, 0]), centroids)
        np.testing.assert_array_equal(centroids, [[0.0, 0.0]])

    def test_cluster_sizes(self):
        self.assertEqual(kmean.cluster_sizes(np.array([0, 2, 2, 0, 2]), 3), [2, 0, 3])


class TestIterationScenarios(unittest.TestCase):

    def test_two_pairs_two_centroids(self):
        state = session.from_arrays(
            [(-0.9, -0.9), (-0.8, -0.8), (0.9, 0.9), (0.8, 0.8)],
            [(-0.9, -0.9), (0.9, 0.9)],
        )
        state = session.step(state)
        self.assertEqual(state.labels.tolist(), [0, 0, 1, 1])
        np.testing.assert_allclose(state.centroids[0], [-0.85, -0.85])
        np.testing.assert_allclose(state.centroids[1], [0.85, 0.85])

    def test_unreachable_centroid_never_moves(self):
        rng = np.random.default_rng(11)
        points = rng.uniform(-1, 1, size=(20, 2))
        far = np.array([50.0, -50.0])
        state = session.from_arrays(points, [points[0], points[1], far])

        for _ in range(5):
            state = session.step(state)
            self.assertFalse(np.any(state.labels == 2))
            self.assertEqual(state.centroids[2].tobytes(), far.tobytes())


if __name__ == "__main__":
    unittest.main()
