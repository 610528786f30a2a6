import os
import sys

import pytest

from cvbuild.error import CvBuildCommandError, CvBuildError
from cvbuild.tools import Tools


def test_run_returns_stdout(tmp_path):
    tools = Tools(cwd=str(tmp_path))
    assert tools.run([sys.executable, "-c", "print('hello')"], output=False) == "hello"


def test_run_passes_arguments_literally(tmp_path):
    tools = Tools(cwd=str(tmp_path))
    out = tools.run([sys.executable, "-c", "import sys; print(sys.argv[1])", "{0} $HOME"], output=False)
    assert out == "{0} $HOME"


def test_run_in_cwd(tmp_path):
    tools = Tools()
    with tools.cwd(str(tmp_path)):
        out = tools.run([sys.executable, "-c", "import os; print(os.getcwd())"], output=False)
    assert os.path.realpath(out) == os.path.realpath(str(tmp_path))


def test_run_failure_carries_result(tmp_path):
    tools = Tools(cwd=str(tmp_path))
    script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"
    with pytest.raises(CvBuildCommandError) as exc:
        tools.run([sys.executable, "-c", script], output=False)
    assert exc.value.returncode == 3
    assert exc.value.stdout == ["out"]
    assert exc.value.stderr == ["err"]


def test_run_missing_executable(tmp_path):
    tools = Tools(cwd=str(tmp_path))
    with pytest.raises(CvBuildCommandError):
        tools.run([str(tmp_path / "no-such-tool"), "--version"], output=False)


def test_run_tee(tmp_path):
    tools = Tools(cwd=str(tmp_path))
    logfile = tmp_path / "out.log"
    with open(str(logfile), "w") as tee:
        tools.run([sys.executable, "-c", "print('one'); print('two')"], output=False, tee=tee)
    assert logfile.read_text().splitlines() == ["one", "two"]


def test_environ_is_scoped(tmp_path):
    tools = Tools(cwd=str(tmp_path), env=dict(os.environ))
    script = "import os; print(os.environ['OPENCV_INSTALL'])"
    with tools.environ(OPENCV_INSTALL="/work/installed"):
        assert tools.run([sys.executable, "-c", script], output=False) == "/work/installed"
    assert tools.getenv("OPENCV_INSTALL") is None


def test_cwd_must_exist(tmp_path):
    tools = Tools(cwd=str(tmp_path))
    with pytest.raises(CvBuildError, match="permissions"):
        with tools.cwd("missing"):
            pass


def test_mkdir_and_rmtree(tmp_path):
    tools = Tools(cwd=str(tmp_path))
    tools.mkdir("opencv/build")
    assert (tmp_path / "opencv" / "build").is_dir()
    tools.rmtree("opencv")
    assert not tools.exists("opencv")
    tools.rmtree("opencv")
