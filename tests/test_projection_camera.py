import numpy as np
import pytest

from prsmath.camera.projection import ProjectionCamera, ProjectionConfig
from prsmath.core.errors import InvalidArgumentError, SingularMatrixError
from prsmath.core.matrix4 import Matrix4
from prsmath.core.quaternion import Quaternion
from prsmath.core.transform import Transform
from prsmath.core.vector3 import Vector3


def test_default_config():
    config = ProjectionConfig()
    assert (config.near, config.far, config.fov, config.aspect) == (0.1, 100.0, 60.0, 1.0)


def test_projection_built_from_config():
    camera = ProjectionCamera(ProjectionConfig(near=0.5, far=50.0, fov=45.0, aspect=1.5))
    expected = Matrix4().set_to_projection(0.5, 50.0, 45.0, 1.5)
    assert camera.projection == expected


def test_resize_updates_aspect():
    camera = ProjectionCamera()
    camera.resize(1920, 1080)

    assert camera.config.aspect == pytest.approx(1920 / 1080)
    assert camera.projection[0, 0] == pytest.approx(camera.projection[1, 1] * 1080 / 1920)


@pytest.mark.parametrize("size", [(0, 100), (100, 0), (-1, 10)])
def test_resize_rejects_empty_viewport(size):
    camera = ProjectionCamera()
    with pytest.raises(InvalidArgumentError):
        camera.resize(*size)
    assert camera.config.aspect == 1.0


def test_view_matrix_inverts_camera_transform():
    camera = ProjectionCamera(transform=Transform(position=Vector3(0.0, 0.0, 5.0)))
    view = camera.view_matrix()

    assert view[0, 3] == pytest.approx(0.0)
    assert view[1, 3] == pytest.approx(0.0)
    assert view[2, 3] == pytest.approx(-5.0)


def test_view_matrix_with_rotation():
    transform = Transform(
        position=Vector3(1.0, 2.0, 3.0),
        rotation=Quaternion.from_axis_angle(Vector3(0.0, 1.0, 0.0), 0.8),
    )
    camera = ProjectionCamera(transform=transform)

    product = camera.view_matrix().multiply(transform.to_matrix())
    assert np.allclose(product.values, Matrix4().values, atol=1e-9)


def test_view_projection():
    camera = ProjectionCamera(transform=Transform(position=Vector3(0.0, 1.0, 4.0)))
    out = Matrix4()

    vp = camera.view_projection(out)
    assert vp is out
    expected = camera.projection @ camera.view_matrix()
    assert np.allclose(vp.values, expected.values)


def test_uniform_bytes():
    camera = ProjectionCamera()
    data = camera.uniform_bytes()

    assert len(data) == 64
    values = np.frombuffer(data, dtype=np.float32)
    assert np.allclose(values, camera.view_projection().values, atol=1e-6)


def test_zero_scale_camera_cannot_build_view():
    camera = ProjectionCamera(transform=Transform(scale=Vector3(0.0, 1.0, 1.0)))
    with pytest.raises(SingularMatrixError):
        camera.view_matrix()
