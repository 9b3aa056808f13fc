"""Unit tests for the bounding volume hierarchy and HittableList.

Tests cover:
- Agreement between BVH traversal and a linear scan of the same objects
- Leaf counts, the empty-scene placeholder and input order preservation
- Determinism of the build for a fixed generator seed
- Shape invariants raised as BVHInvariantError
"""

import math

import numpy as np
import pytest

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_unit_vector
from pathtracer.core.vector import Vector3
from pathtracer.geometry import BVHInvariantError, BVHNode, HittableList, Sphere
from pathtracer.geometry.hittable import EmptyHittable
from pathtracer.geometry.planar import Quad, Triangle

FORWARD = Interval(0.001, math.inf)


def random_scene(rng, count, material):
    """Mix of spheres, quads and triangles scattered in a 10-unit cube."""
    world = HittableList()
    for k in range(count):
        center = Vector3(*rng.uniform(-5.0, 5.0, 3))
        kind = k % 3
        if kind == 0:
            world.add(Sphere(center, float(rng.uniform(0.1, 1.0)), material))
        elif kind == 1:
            world.add(Quad(center, Vector3(*rng.uniform(-1, 1, 3)), Vector3(*rng.uniform(-1, 1, 3)), material))
        else:
            world.add(Triangle(center, Vector3(*rng.uniform(-1, 1, 3)), Vector3(*rng.uniform(-1, 1, 3)), material))
    return world


class TestHittableList:
    """Tests for the linear scene container."""

    def test_closest_hit_wins(self, gray):
        near = Sphere(Vector3(0, 0, -2), 0.5, gray)
        far = Sphere(Vector3(0, 0, -5), 0.5, gray)
        world = HittableList([far, near])
        rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), FORWARD)
        assert rec.t == pytest.approx(1.5)

    def test_bounding_box_grows_with_objects(self, gray):
        world = HittableList()
        assert world.bounding_box().is_empty()
        world.add(Sphere(Vector3(0, 0, 0), 1.0, gray))
        world.add(Sphere(Vector3(5, 0, 0), 1.0, gray))
        assert world.bounding_box().x == Interval(-1, 6)
        world.clear()
        assert len(world) == 0
        assert world.bounding_box().is_empty()

    def test_empty_list_misses(self):
        assert HittableList().hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), FORWARD) is None


class TestBVHMatchesLinearScan:
    """The tree must report the same closest hit as scanning every object."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_random_scene(self, seed, gray):
        rng = np.random.default_rng(seed)
        world = random_scene(rng, 40, gray)
        bvh = world.build_bvh(np.random.default_rng(seed + 100))

        for _ in range(300):
            origin = Vector3(*rng.uniform(-8.0, 8.0, 3))
            ray = Ray(origin, random_unit_vector(rng))
            expected = world.hit(ray, FORWARD)
            actual = bvh.hit(ray, FORWARD)
            if expected is None:
                assert actual is None
            else:
                assert actual is not None
                assert actual.t == pytest.approx(expected.t)

    def test_respects_interval_upper_bound(self, gray):
        world = HittableList([Sphere(Vector3(0, 0, -z), 0.4, gray) for z in range(2, 8)])
        bvh = world.build_bvh()
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert bvh.hit(ray, Interval(0.001, 1.0)) is None
        assert bvh.hit(ray, Interval(2.0, math.inf)).t == pytest.approx(2.4)


class TestBVHStructure:
    """Tests for tree shape and construction."""

    @pytest.mark.parametrize("count", [1, 2, 3, 7, 50])
    def test_every_object_has_one_leaf(self, count, gray):
        world = HittableList([Sphere(Vector3(float(k), 0, 0), 0.4, gray) for k in range(count)])
        bvh = world.build_bvh()
        assert bvh.leaf_count() == count

    def test_depth_is_logarithmic(self, gray):
        world = HittableList([Sphere(Vector3(float(k), 0, 0), 0.4, gray) for k in range(64)])
        # Median splits keep the tree balanced
        assert world.build_bvh().depth() <= 7

    def test_empty_scene_is_placeholder_leaf(self):
        bvh = HittableList().build_bvh()
        assert bvh.is_leaf()
        assert isinstance(bvh.object, EmptyHittable)
        assert bvh.leaf_count() == 0
        assert bvh.leaf_count(include_empty=True) == 1
        assert bvh.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, 1)), Interval(-math.inf, math.inf)) is None

    def test_input_order_is_preserved(self, gray):
        spheres = [Sphere(Vector3(float(-k), 0, 0), 0.4, gray) for k in range(10)]
        world = HittableList(spheres)
        world.build_bvh()
        assert list(world) == spheres

    def test_two_objects_keep_their_order(self, gray):
        a = Sphere(Vector3(5, 0, 0), 0.5, gray)
        b = Sphere(Vector3(-5, 0, 0), 0.5, gray)
        bvh = BVHNode.from_objects([a, b], np.random.default_rng(0))
        assert bvh.left.object is a
        assert bvh.right.object is b

    def test_root_box_encloses_scene(self, gray):
        world = random_scene(np.random.default_rng(9), 20, gray)
        root_box = world.build_bvh().bounding_box()
        scene_box = world.bounding_box()
        for axis in range(3):
            assert root_box.axis(axis).min <= scene_box.axis(axis).min
            assert root_box.axis(axis).max >= scene_box.axis(axis).max

    def test_same_seed_gives_same_tree(self, gray):
        world = random_scene(np.random.default_rng(4), 25, gray)
        first = world.build_bvh(np.random.default_rng(42)).describe()
        second = world.build_bvh(np.random.default_rng(42)).describe()
        assert first == second
        assert first.count("\n") + 1 == 2 * 25 - 1


class TestBVHInvariants:
    """Malformed nodes are reported instead of silently missing."""

    def test_node_without_object_or_children(self):
        with pytest.raises(BVHInvariantError):
            BVHNode()

    def test_node_with_one_child(self, gray):
        child = BVHNode.leaf(Sphere(Vector3(0, 0, 0), 1.0, gray))
        with pytest.raises(BVHInvariantError):
            BVHNode(left=child)

    def test_internal_node_with_object_fails_on_hit(self, gray):
        sphere = Sphere(Vector3(0, 0, -3), 1.0, gray)
        node = BVHNode(BVHNode.leaf(sphere), BVHNode.leaf(sphere))
        node.object = sphere
        with pytest.raises(BVHInvariantError):
            node.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), FORWARD)

    def test_internal_node_missing_child_fails_on_hit(self, gray):
        sphere = Sphere(Vector3(0, 0, -3), 1.0, gray)
        node = BVHNode(BVHNode.leaf(sphere), BVHNode.leaf(sphere))
        node.right = None
        with pytest.raises(BVHInvariantError):
            node.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), FORWARD)

    def test_leaf_without_object_fails_on_hit(self, gray):
        leaf = BVHNode.leaf(Sphere(Vector3(0, 0, -3), 1.0, gray))
        leaf.object = None
        with pytest.raises(BVHInvariantError):
            leaf.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), FORWARD)

    def test_invariant_error_is_an_assertion(self):
        assert issubclass(BVHInvariantError, AssertionError)
