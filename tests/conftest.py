"""Shared fixtures for xtrsky tests."""

import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def write_xtr(tmp_path):
    """Factory writing lines to an XTR file and returning its path."""

    def _write(lines, name="SITE0010.18_xtr"):
        path = tmp_path / name
        header = ["#====== Summary statistics (v.2.x)", "#GNSSUM  header"]
        path.write_text("\n".join(header + [""] + list(lines)) + "\n")
        return path

    return _write
