"""Tests of the netlib problem cache."""

import os
import shutil

import pytest

from mpsviewer.netlib import get_problem, get_problem_filename


__folder__ = os.path.dirname(__file__)


def test_get_problem_from_cache(tmp_path):
    folder = str(tmp_path / "netlib")
    filename = get_problem_filename("full", folder)
    assert filename == os.path.join(folder, "FULL.SIF")
    os.makedirs(folder)
    shutil.copy(os.path.join(__folder__, "data", "full.mps"), filename)

    lp = get_problem("full", folder, url="file:///nonexistent/%s.SIF")
    assert lp.name == "FULLTEST"
    assert len(lp.columns) == 3


def test_get_problem_downloads_missing_file(tmp_path):
    source = tmp_path / "mirror"
    source.mkdir()
    shutil.copy(os.path.join(__folder__, "data", "example.mps"), source / "EXAMPLE.SIF")
    url = source.as_uri() + "/%s.SIF"

    folder = str(tmp_path / "cache")
    lp = get_problem("example", folder, url=url)
    assert lp.name == "test"
    assert os.path.isfile(os.path.join(folder, "EXAMPLE.SIF"))


def test_failed_download_leaves_no_file(tmp_path):
    folder = str(tmp_path / "cache")
    url = (tmp_path / "missing").as_uri() + "/%s.SIF"
    with pytest.raises(OSError):
        get_problem("afiro", folder, url=url)
    assert os.listdir(folder) == []
