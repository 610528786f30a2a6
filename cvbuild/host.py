import platform

from cvbuild.error import raise_error


LINUX = "Linux"
MINGW = "MINGW"
CYGWIN = "CYGWIN"
WINDOWS = "Windows"


class Host(object):
    """ The platform cvbuild is running on.

    Windows hosts come in three flavours: MSYS2/MinGW shells, Cygwin,
    and native Windows. Path conversion between the POSIX and Windows
    forms only applies to Cygwin and MSYS2 where ``cygpath`` is
    available.
    """

    def __init__(self, system=None, machine=None):
        system = system if system is not None else platform.system()
        self.machine = machine if machine is not None else platform.machine()

        if "MINGW" in system or "MSYS" in system:
            self.plat = MINGW
        elif "CYGWIN" in system:
            self.plat = CYGWIN
        elif system == "Windows":
            self.plat = WINDOWS
        elif system == "Linux":
            self.plat = LINUX
        else:
            raise_error(
                "Sorry, I don't know how to handle building for \"{0}\". Currently this works on:\n"
                "      1) Windows using MSYS2\n"
                "      2) Windows using Cygwin\n"
                "      3) Linux", system)

    def __str__(self):
        return self.plat

    @property
    def windows(self):
        return self.plat in [MINGW, CYGWIN, WINDOWS]

    @property
    def linux(self):
        return self.plat == LINUX

    @property
    def cmake_arch(self):
        """ Architecture argument for CMake, so that it needn't be part of the generator name. """
        if self.windows and "64" in self.machine:
            return "-Ax64"
        return None

    def cpath(self, tools, path):
        """ Convert a path to the form used by the shell environment. """
        if self.plat in [MINGW, CYGWIN]:
            return tools.run(["cygpath", path], output=False).strip()
        return path

    def cwpath(self, tools, path):
        """ Convert a path to the form understood by native Windows programs. """
        if self.plat == CYGWIN:
            return tools.run(["cygpath", "-w", path], output=False).strip()
        return path
