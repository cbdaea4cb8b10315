import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from cyclotron.config import SimulationParameters


@pytest.fixture
def unit_params():
    """q = B = m = v_perp = 1, no axial drift."""
    return SimulationParameters(v_parallel=0.0)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
