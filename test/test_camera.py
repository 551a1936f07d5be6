import math

import pytest

from homogeneous_transforms import (
    Affine3, Camera, Matrix4, Perspective, Vector2, Vector3, Vector4, look_at,
    object_to_clip, perspective, project_point, rotation, world_to_clip
)
from homogeneous_transforms.errors import (
    InvalidParameterError, NotAffineError, ZeroLengthError
)


class TestPerspective:
    def test_on_axis_near_point_maps_to_centre(self):
        ndc = project_point(perspective(90, 1.0, 1.0), Vector3(0, 0, 1))
        assert ndc.is_close(Vector3(0, 0, 1))

    def test_frustum_edge_maps_to_screen_edge(self):
        ndc = project_point(perspective(90, 1.0, 1.0), Vector3(1, 0, 1))
        assert ndc.is_close(Vector3(1, 0, 1))

    def test_basis_columns(self):
        expected = Matrix4(Vector4(1, 0, 0, 0), Vector4(0, 1, 0, 0),
                           Vector4(0, 0, 0, 1), Vector4(0, 0, 2, 0))
        assert perspective(90, 1, 2).is_close(expected)

    def test_point_lands_in_near_and_depth_slots(self):
        clip = perspective(90, 1, 0.5) @ Vector4(0.25, -0.5, 3, 1)
        assert clip.is_close(Vector4(0.25, -0.5, 0.5, 3))

    @pytest.mark.parametrize('near', [0.1, 1.0, 7.5])
    def test_depth_is_one_at_near_plane_and_decreasing(self, near):
        p = perspective(60, 16 / 9, near)
        assert project_point(p, Vector3(0, 0, near)).z == pytest.approx(1)
        zs = [near, near * 1.01, near * 2, near * 10, near * 1e3, near * 1e9]
        depths = [project_point(p, Vector3(0.3, -0.2, z)).z for z in zs]
        assert all(a > b for a, b in zip(depths, depths[1:]))
        assert 0 < depths[-1] < 1e-8

    def test_aspect_ratio_widens_view(self):
        params = Perspective(fov=50, aspect_ratio=2.5, near=0.3)
        half_width, half_height = params.half_extents()
        assert half_width == pytest.approx(2.5 * half_height)
        assert half_height == pytest.approx(math.tan(math.radians(25)))
        corner = project_point(params.matrix(), Vector3(half_width * 4, half_height * 4, 4))
        assert corner.xy.is_close(Vector2(1, 1))

    @pytest.mark.parametrize('aspect_ratio', [0.2, 1.0, 16 / 9, 8.0])
    def test_diagonal_fov_bounds_corner_angle(self, aspect_ratio):
        params = Perspective(fov=90, aspect_ratio=aspect_ratio, near=1, diagonal=True)
        half_width, half_height = params.half_extents()
        assert math.hypot(half_width, half_height) == pytest.approx(math.tan(math.radians(45)))
        assert half_width == pytest.approx(aspect_ratio * half_height)

    @pytest.mark.parametrize('fov, aspect_ratio, near', [
        (0, 1, 1), (180, 1, 1), (-30, 1, 1), (float('nan'), 1, 1),
        (90, 0, 1), (90, -1, 1), (90, 1, 0), (90, 1, -0.1), (90, 1, float('inf')),
    ])
    def test_invalid_parameters(self, fov, aspect_ratio, near):
        with pytest.raises(InvalidParameterError):
            perspective(fov, aspect_ratio, near)


class TestLookAt:
    def test_default_orientation(self):
        placement = look_at(Vector3(0, 0, -5), Vector3(0, 0, 0))
        assert placement.linear.is_close(Affine3().linear)
        assert placement.offset == Vector3(0, 0, -5)

    def test_basis_is_orthonormal_and_right_handed(self):
        placement = look_at(Vector3(3, 2, -4), Vector3(1, -1, 2), Vector3(0, 1, 0))
        assert placement.linear.is_orthonormal()
        assert placement.linear.determinant() == pytest.approx(1)

    def test_target_projects_to_screen_centre(self):
        eye, target = Vector3(3, 2, -4), Vector3(1, -1, 2)
        mvp = world_to_clip(look_at(eye, target), Perspective(70, 1.5, 0.1))
        ndc = project_point(mvp, target)
        assert ndc.xy.is_close(Vector2(0, 0))
        assert ndc.z == pytest.approx(0.1 / (target - eye).length())

    def test_degenerate_views_raise(self):
        with pytest.raises(ZeroLengthError):
            look_at(Vector3(1, 1, 1), Vector3(1, 1, 1))
        with pytest.raises(ZeroLengthError):
            look_at(Vector3(0, 0, 0), Vector3(0, 5, 0), Vector3(0, 1, 0))


class TestComposition:
    @pytest.fixture
    def scene(self):
        camera = look_at(Vector3(0, 0, -5), Vector3(0, 0, 0))
        projection = Perspective(fov=90, aspect_ratio=1, near=1)
        instance = Affine3.from_components(Vector3(0.5, 0, 1), rotation(30, Vector3(0, 1, 0)),
                                           Vector3(2, 2, 2))
        return camera, projection, instance

    def test_world_origin_depth(self, scene):
        camera, projection, _ = scene
        ndc = project_point(world_to_clip(camera, projection), Vector3(0, 0, 0))
        assert ndc.is_close(Vector3(0, 0, 0.2))

    def test_accepts_values_or_matrices(self, scene):
        camera, projection, _ = scene
        assert world_to_clip(camera, projection).is_close(
            world_to_clip(camera.matrix(), projection.matrix()))

    def test_object_to_clip_matches_stagewise(self, scene):
        camera, projection, instance = scene
        w2c = world_to_clip(camera, projection)
        mvp = object_to_clip(w2c, instance)
        for p in [Vector3(0, 0, 0), Vector3(1, -1, 0.5), Vector3(-0.3, 0.7, -0.2)]:
            staged = project_point(w2c, instance.apply_point(p))
            assert project_point(mvp, p).is_close(staged)

    def test_camera_value(self, scene):
        camera, projection, instance = scene
        cam = Camera(camera, projection)
        assert cam.world_to_clip().is_close(world_to_clip(camera, projection))
        assert cam.object_to_clip(instance).is_close(
            object_to_clip(world_to_clip(camera, projection), instance.matrix()))
        looking = Camera.looking_at(Vector3(0, 0, -5), Vector3(0, 0, 0), projection)
        assert looking.world_to_clip().is_close(cam.world_to_clip())

    def test_projective_camera_is_rejected(self):
        with pytest.raises(NotAffineError):
            world_to_clip(perspective(90, 1, 1), Perspective())
