import pytest

from cvbuild.error import CvBuildError
from cvbuild.host import Host


@pytest.mark.parametrize("system, plat, windows", [
    ("Linux", "Linux", False),
    ("MINGW64_NT-10.0-19045", "MINGW", True),
    ("MSYS_NT-10.0-19045", "MINGW", True),
    ("CYGWIN_NT-10.0", "CYGWIN", True),
    ("Windows", "Windows", True),
])
def test_platforms(system, plat, windows):
    host = Host(system=system, machine="x86_64")
    assert str(host) == plat
    assert host.windows is windows
    assert host.linux is (plat == "Linux")


def test_unsupported_platform():
    with pytest.raises(CvBuildError, match="Darwin"):
        Host(system="Darwin", machine="arm64")


def test_cmake_arch():
    assert Host(system="CYGWIN_NT-10.0", machine="x86_64").cmake_arch == "-Ax64"
    assert Host(system="Windows", machine="AMD64").cmake_arch == "-Ax64"
    assert Host(system="Windows", machine="x86").cmake_arch is None
    assert Host(system="Linux", machine="x86_64").cmake_arch is None


def test_path_conversion_on_linux(tools, linux):
    assert linux.cpath(tools, "/opt/jdk") == "/opt/jdk"
    assert linux.cwpath(tools, "/opt/jdk") == "/opt/jdk"
    assert tools.commands == []


def test_path_conversion_on_cygwin(tools):
    host = Host(system="CYGWIN_NT-10.0", machine="x86_64")
    tools.on(["cygpath", "-w"], output="C:\\cygwin64\\tmp\\opencv\\installed\n")
    tools.on(["cygpath"], output="/cygdrive/c/Program Files/Java/jdk1.8.0\n")
    assert host.cwpath(tools, "/tmp/opencv/installed") == "C:\\cygwin64\\tmp\\opencv\\installed"
    assert host.cpath(tools, "C:\\Program Files\\Java\\jdk1.8.0") == "/cygdrive/c/Program Files/Java/jdk1.8.0"


def test_path_conversion_on_mingw(tools):
    host = Host(system="MINGW64_NT-10.0", machine="x86_64")
    tools.on(["cygpath"], output="/c/tools/make.exe")
    assert host.cwpath(tools, "/c/work") == "/c/work"
    assert host.cpath(tools, "C:/tools/make.exe") == "/c/tools/make.exe"
