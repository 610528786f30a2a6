import os

import pytest

from cvbuild import filesystem as fs
from cvbuild import log
from cvbuild.error import CvBuildCommandError
from cvbuild.host import Host
from cvbuild.options import BuildConfiguration
from cvbuild.sources import repository_name
from cvbuild.tools import Tools
from cvbuild.version_utils import version


CMAKE_SUMMARY = """\
-- General configuration for OpenCV 3.4.2 =====================================
--   Platform:
--     Host:                        Linux 5.4.0 x86_64
--     CMake:                       3.16.3
--     CMake generator:             Unix Makefiles
--     CMake build tool:            /usr/bin/make
--     Configuration:               Release
--
--   Java:
--     ant:                         /usr/bin/ant (ver 1.10.7)
--     JNI:                         /usr/lib/jvm/java-8-openjdk-amd64/include
--     Java wrappers:               YES
--     Java tests:                  NO
--
--   Install to:                    /tmp/opencv/installed
-- -----------------------------------------------------------------
"""

CMAKE_SUMMARY_NO_WRAPPERS = CMAKE_SUMMARY.replace(
    "--     Java wrappers:               YES",
    "--     Java wrappers:               NO")


@pytest.fixture(autouse=True)
def no_file_log(monkeypatch):
    monkeypatch.setattr(log, "start_file_log", lambda: None)


class FakeTools(Tools):
    """ Records commands instead of running them.

    Responses are matched on a command prefix. A response may print
    output, fail with a return code, or call a function to simulate
    side effects such as a clone creating its directory.
    """

    def __init__(self, cwd, env=None):
        super().__init__(cwd=str(cwd), env=env if env is not None else {"PATH": "/usr/bin"})
        self.commands = []
        self.responses = []
        self.executables = {}

    def on(self, prefix, output="", returncode=0, action=None):
        self.responses.append((list(prefix), output, returncode, action))

    def which(self, executable):
        return self.executables.get(executable)

    def run(self, cmd, **kwargs):
        cmd = [str(arg) for arg in cmd]
        self.commands.append((cmd, self.getcwd(), dict(self._env)))
        for prefix, output, returncode, action in self.responses:
            if cmd[:len(prefix)] != prefix:
                continue
            if action is not None:
                action(self, cmd)
            tee = kwargs.get("tee")
            if tee is not None and output:
                tee.write(output)
            if returncode != 0:
                raise CvBuildCommandError("Command failed: " + " ".join(cmd),
                                          output.splitlines(), [], returncode)
            return output
        return ""

    def ran(self, *prefix):
        return [cmd for cmd, cwd, env in self.commands if cmd[:len(prefix)] == list(prefix)]


def clone_creates_directory(tools, cmd):
    fs.makedirs(os.path.join(tools.getcwd(), repository_name(cmd[-1])))


@pytest.fixture
def tools(tmp_path):
    return FakeTools(tmp_path)


@pytest.fixture
def linux():
    return Host(system="Linux", machine="x86_64")


@pytest.fixture
def make_options(tmp_path):
    def _make(**kwargs):
        kwargs.setdefault("workdir", str(tmp_path))
        kwargs["version"] = version(kwargs.get("version", "3.4.2"))
        return BuildConfiguration(**kwargs)
    return _make
