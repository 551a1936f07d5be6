import numpy as np
import pytest

from homogeneous_transforms import (
    Matrix3, Matrix4, Vector2, Vector3, Vector4, rotation, x_rotation,
    y_rotation, z_rotation, scaling, translation, homogeneous,
    scale_rotate_translate, multiply
)
from homogeneous_transforms.errors import ZeroLengthError

ANGLES = [0, 30, 90, 135, 180, 270, -45, 721.5]


@pytest.fixture
def random_points():
    """Seeded random 3D points."""
    np.random.seed(42)
    return [Vector3.from_array(p) for p in np.random.uniform(-10, 10, (20, 3))]


class TestRotation:
    def test_quarter_turn(self):
        assert (rotation(90) @ Vector2(1, 0)).is_close(Vector2(0, 1))
        assert (rotation(-90) @ Vector2(1, 0)).is_close(Vector2(0, -1))

    def test_second_column_is_perpendicular_of_first(self):
        r = rotation(33)
        assert r.column(1) == r.column(0).perpendicular()

    @pytest.mark.parametrize('angle', ANGLES)
    def test_rotation_preserves_length(self, angle, random_points):
        r2 = rotation(angle)
        r3 = rotation(angle, Vector3(1, -2, 0.5))
        for p in random_points:
            assert (r2 @ p.xy).length() == pytest.approx(p.xy.length())
            assert (r3 @ p).length() == pytest.approx(p.length())

    @pytest.mark.parametrize('axis', [None, Vector3(0, 0, 1), Vector3(3, 1, 2)])
    def test_trigonometry_evaluated_once(self, axis, monkeypatch):
        calls = []
        real_sin, real_cos = np.sin, np.cos
        monkeypatch.setattr(np, 'sin', lambda x: calls.append('sin') or real_sin(x))
        monkeypatch.setattr(np, 'cos', lambda x: calls.append('cos') or real_cos(x))
        r = rotation(40, axis)
        assert sorted(calls) == ['cos', 'sin']

        calls.clear()
        r @ r.vector_type.zero()
        assert calls == []

    @pytest.mark.parametrize('angle', ANGLES)
    def test_axis_shortcuts_match_axis_angle(self, angle):
        assert x_rotation(angle).is_close(rotation(angle, Vector3(1, 0, 0)))
        assert y_rotation(angle).is_close(rotation(angle, Vector3(0, 1, 0)))
        assert z_rotation(angle).is_close(rotation(angle, Vector3(0, 0, 2)))

    def test_axis_rotations_are_right_handed(self):
        assert (z_rotation(90) @ Vector3(1, 0, 0)).is_close(Vector3(0, 1, 0))
        assert (x_rotation(90) @ Vector3(0, 1, 0)).is_close(Vector3(0, 0, 1))
        assert (y_rotation(90) @ Vector3(0, 0, 1)).is_close(Vector3(1, 0, 0))

    def test_axis_is_fixed(self):
        axis = Vector3(1, 2, 3)
        assert (rotation(77, axis) @ axis).is_close(axis)

    def test_zero_axis_raises(self):
        with pytest.raises(ZeroLengthError):
            rotation(45, Vector3(0, 0, 0))

    def test_axis_must_be_3d(self):
        with pytest.raises(TypeError, match='Vector3'):
            rotation(45, Vector2(1, 0))
        with pytest.raises(TypeError):
            rotation(45, Vector4(0, 0, 1, 0))

    @pytest.mark.parametrize('angle', ANGLES)
    def test_transpose_equals_inverse(self, angle):
        r = rotation(angle, Vector3(2, -1, 1))
        assert r.transpose().is_close(r.inverse())
        assert rotation(angle).transpose().is_close(rotation(angle).inverse())
        assert rotation(angle).transpose().is_close(rotation(-angle))


class TestScalingAndTranslation:
    def test_scaling(self):
        assert scaling(Vector2(2, 3)) @ Vector2(1, 1) == Vector2(2, 3)
        assert scaling(Vector3(2, 3, 4)) @ Vector3(1, -1, 0.5) == Vector3(2, -3, 2)

    def test_scaling_rejects_other_types(self):
        with pytest.raises(TypeError):
            scaling((2, 3))

    def test_translation_moves_points_not_directions(self):
        t = translation(Vector3(5, 6, 7))
        assert isinstance(t, Matrix4)
        assert t @ Vector3(1, 2, 3).to_point() == Vector4(6, 8, 10, 1)
        assert t @ Vector3(1, 2, 3).to_direction() == Vector4(1, 2, 3, 0)
        assert translation(Vector2(1, 2)) @ Vector2(3, 4).to_point() == Vector3(4, 6, 1)

    def test_translation_composes_additively(self, random_points):
        a, b = Vector3(1.5, -2, 3), Vector3(-4, 0.25, 10)
        combined = translation(a) @ translation(b)
        for p in random_points:
            assert (combined @ p.to_point()).is_close(translation(a + b) @ p.to_point())
        a2, b2 = a.xy, b.xy
        for p in random_points:
            q = p.xy.to_point()
            assert (translation(a2) @ translation(b2) @ q).is_close(translation(a2 + b2) @ q)

    def test_homogeneous_lift(self):
        m = homogeneous(rotation(30), Vector2(4, 5))
        assert isinstance(m, Matrix3)
        assert m.row(2) == Vector3(0, 0, 1)
        assert m.column(2) == Vector3(4, 5, 1)
        assert homogeneous(Matrix3.identity()) == Matrix4.identity()


class TestCombined:
    def test_chain_matches_sequential_application(self, random_points):
        steps = [translation(Vector3(1, 2, 3)),
                 homogeneous(rotation(25, Vector3(0, 1, 1))),
                 homogeneous(scaling(Vector3(2, 0.5, 3)))]
        combined = multiply(*steps)
        for p in random_points:
            expected = p.to_point()
            for step in reversed(steps):
                expected = step @ expected
            assert (combined @ p.to_point()).is_close(expected)

    def test_scale_rotate_translate_2d(self):
        scale, offset = Vector2(2, 3), Vector2(5, -1)
        expected = (translation(offset) @ homogeneous(rotation(30))
                    @ homogeneous(scaling(scale)))
        assert scale_rotate_translate(scale, 30, offset).is_close(expected)
        assert scale_rotate_translate(scale, rotation(30), offset).is_close(expected)

    def test_scale_rotate_translate_3d(self):
        scale, offset = Vector3(2, 3, 0.5), Vector3(5, -1, 8)
        r = rotation(60, Vector3(1, 1, 1))
        expected = translation(offset) @ homogeneous(r) @ homogeneous(scaling(scale))
        assert scale_rotate_translate(scale, r, offset).is_close(expected)

    def test_scale_rotate_translate_dimension_mismatch(self):
        with pytest.raises(TypeError):
            scale_rotate_translate(Vector3(1, 1, 1), 30, Vector3(0, 0, 0))
        with pytest.raises(TypeError):
            scale_rotate_translate(Vector2(1, 1), Matrix3.identity(), Vector2(0, 0))
