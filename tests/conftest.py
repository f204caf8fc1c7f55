import matplotlib

matplotlib.use("Agg")

import pytest

from polycube.core.config import SceneConfig
from polycube.scene.scene import Scene


@pytest.fixture
def scene():
    return Scene(SceneConfig())


@pytest.fixture(params=["hashed", "pairwise"])
def strategy(request):
    return request.param


