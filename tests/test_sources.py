import os

import pytest

from cvbuild import filesystem as fs
from cvbuild.error import CvBuildError
from cvbuild.sources import SourceTree, repository_name

from conftest import clone_creates_directory


def _touch(*parts):
    path = os.path.join(*parts)
    fs.makedirs(os.path.dirname(path))
    with open(path, "w") as f:
        f.write("x")
    return path


def test_repository_name():
    assert repository_name("https://github.com/opencv/opencv.git") == "opencv"
    assert repository_name("https://github.com/opencv/opencv_contrib.git/") == "opencv_contrib"
    assert repository_name("/mirrors/opencv_contrib") == "opencv_contrib"


def test_skip_checkout_keeps_sources(tools, make_options):
    options = make_options(skip_checkout=True)
    source = _touch(options.sourcedir, "opencv", "CMakeLists.txt")
    stale = _touch(options.builddir, "CMakeCache.txt")

    SourceTree(tools, options, "git").prepare()

    assert os.path.exists(source)
    assert not os.path.exists(stale)
    assert os.path.isdir(options.builddir)
    assert tools.commands == []


def test_checkout_clones_both_repositories(tools, make_options):
    options = make_options(version="3.4.2")
    stale = _touch(options.rootdir, "installed", "lib", "libopencv_java342.so")
    tools.on(["git", "clone"], action=clone_creates_directory)

    SourceTree(tools, options, "git").prepare()

    assert not os.path.exists(stale)
    assert os.path.isdir(options.builddir)
    commands = [(cmd, cwd) for cmd, cwd, env in tools.commands]
    assert commands == [
        (["git", "clone", "https://github.com/opencv/opencv.git"], options.sourcedir),
        (["git", "checkout", "3.4.2"], os.path.join(options.sourcedir, "opencv")),
        (["git", "clone", "https://github.com/opencv/opencv_contrib.git"], options.sourcedir),
        (["git", "checkout", "3.4.2"], os.path.join(options.sourcedir, "opencv_contrib")),
    ]


def test_checkout_applies_patch(tools, make_options):
    options = make_options(version="3.4.0")
    tools.on(["/opt/git/bin/git", "clone"], action=clone_creates_directory)

    SourceTree(tools, options, "/opt/git/bin/git", patch=True).prepare()

    commands = [(cmd, cwd) for cmd, cwd, env in tools.commands]
    assert commands[1] == (["/opt/git/bin/git", "checkout", "3.4.0"], os.path.join(options.sourcedir, "opencv"))
    assert commands[2] == (
        ["/opt/git/bin/git", "cherry-pick", "f3dde79ed6f5e17f16f4e2ad9669841e0dd6887c"],
        os.path.join(options.sourcedir, "opencv"))
    assert commands[3][0] == ["/opt/git/bin/git", "clone", "https://github.com/opencv/opencv_contrib.git"]


def test_clone_failure_aborts(tools, make_options):
    options = make_options()
    tools.on(["git", "clone"], returncode=128)

    with pytest.raises(CvBuildError, match="Failed to clone"):
        SourceTree(tools, options, "git").prepare()
    assert len(tools.commands) == 1


def test_checkout_failure_aborts(tools, make_options):
    options = make_options(version="9.9.9")
    tools.on(["git", "clone"], action=clone_creates_directory)
    tools.on(["git", "checkout"], returncode=1)

    with pytest.raises(CvBuildError, match="tag 9.9.9 for opencv"):
        SourceTree(tools, options, "git").prepare()
    assert tools.ran("git", "clone", "https://github.com/opencv/opencv_contrib.git") == []


def test_cherry_pick_failure_aborts(tools, make_options):
    options = make_options(version="3.4.0")
    tools.on(["git", "clone"], action=clone_creates_directory)
    tools.on(["git", "cherry-pick"], returncode=1)

    with pytest.raises(CvBuildError, match="cherry-pick"):
        SourceTree(tools, options, "git", patch=True).prepare()
