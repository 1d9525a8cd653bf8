import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture(autouse=True)
def log_file(tmp_path, monkeypatch):
    # Keep diagnostic logging out of the real home directory.
    path = tmp_path / "radar_plotter.log"
    monkeypatch.setenv("RADAR_PLOTTER_LOG", str(path))
    return path
