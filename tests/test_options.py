import os

import pytest

from cvbuild.options import BuildConfiguration


def test_defaults():
    options = BuildConfiguration()
    assert options.workdir == "/tmp"
    assert options.static
    assert not any([options.build_python, options.build_samples, options.build_cuda,
                    options.build_qt, options.skip_checkout, options.skip_packaging,
                    options.deploy])
    assert options.jobs is None


def test_layout(make_options, tmp_path):
    options = make_options()
    root = os.path.join(str(tmp_path), "opencv")
    assert options.rootdir == root
    assert options.sourcedir == os.path.join(root, "sources")
    assert options.builddir == os.path.join(root, "build")
    assert options.installdir == os.path.join(root, "installed")
    assert options.logfile == os.path.join(root, "cmake.out")


def test_read_only(make_options):
    options = make_options()
    with pytest.raises(AttributeError):
        options.deploy = True


def test_unknown_option():
    with pytest.raises(TypeError):
        BuildConfiguration(bogus=True)
