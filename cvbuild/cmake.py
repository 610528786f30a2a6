import re

from cvbuild import log
from cvbuild import utils
from cvbuild.error import raise_error, raise_error_if, raise_error_on_exception


STATIC_ARGS = ["-DBUILD_SHARED_LIBS=OFF", "-DBUILD_FAT_JAVA_LIB=ON"]
SHARED_ARGS = ["-DBUILD_SHARED_LIBS=ON", "-DBUILD_FAT_JAVA_LIB=OFF"]
NO_PYTHON_ARGS = [
    "-DBUILD_opencv_python2=OFF",
    "-DBUILD_opencv_python3=OFF",
    "-DBUILD_opencv_python_bindings_generator=OFF",
]
FIXED_ARGS = [
    "-DENABLE_PRECOMPILED_HEADERS=OFF",
    "-DBUILD_PERF_TESTS=OFF",
    "-DBUILD_TESTS=OFF",
    "-DOPENCV_SKIP_VISIBILITY_HIDDEN=ON",
]

JAVA_SECTION = "--   Java:"
JAVA_WRAPPERS = "--     Java wrappers:"
BUILD_TOOL = "--     CMake build tool:"

WRAPPERS_HINT = """\
It appears that the JNI wrappers won't build in this configuration.
Some common reasons include:
   1) Ant isn't installed or on the path
   2) The cmake build cannot find python.
Note: on Windows when using the Windows CMake (as opposed to the mingw cmake) "ant" needs to be on the Windows PATH"""


def configure_args(options, install_prefix, arch=None):
    """ CMake arguments for a build configuration, excluding the cmake executable. """
    args = [
        "-DCMAKE_BUILD_TYPE=Release",
        "-DCMAKE_INSTALL_PREFIX=" + install_prefix,
        "-DOPENCV_EXTRA_MODULES_PATH=../sources/opencv_contrib/modules",
    ]
    args += STATIC_ARGS if options.static else SHARED_ARGS
    if not options.build_python:
        args += NO_PYTHON_ARGS
    if options.build_samples:
        args.append("-DBUILD_EXAMPLES=ON")
    if options.build_cuda:
        args.append("-DWITH_CUDA=ON")
    if options.build_qt:
        args.append("-DWITH_QT=ON")
    args += FIXED_ARGS
    if arch:
        args.append(arch)
    if options.generator:
        args += ["-G", options.generator]
    args.append("../sources/opencv")
    return args


def java_wrappers_enabled(lines):
    """ Whether the CMake summary says the Java wrappers will be built.

    The ``Java wrappers`` line must be found within four lines after
    the ``Java`` section header and carry a ``YES``.
    """
    for index, line in enumerate(lines):
        if JAVA_SECTION not in line:
            continue
        for candidate in lines[index:index + 5]:
            if JAVA_WRAPPERS in candidate and "YES" in candidate:
                return True
    return False


def find_build_tool(lines):
    """ The native build tool reported in the CMake summary, or None. """
    for line in lines:
        if BUILD_TOOL in line:
            return re.sub(r"^.*CMake build tool: *", "", line).rstrip()
    return None


def is_msbuild(make):
    return "msbuild" in make.lower()


def build_command(make, jobs=None):
    """ Command line installing the configured project with ``make``.

    MSBuild builds the INSTALL project file in release configuration and
    only understands an unbounded ``-m`` for parallelism. Everything else
    is treated as make.
    """
    if is_msbuild(make):
        cmd = [make]
        if jobs is not None:
            cmd.append("-m")
        return cmd + ["INSTALL.vcxproj", "-p:Configuration=Release"]

    cmd = [make]
    if jobs is not None:
        cmd.append("-j" + jobs)
    return cmd + ["install"]


class CMakeBuild(object):
    """ Configures, builds and installs OpenCV with CMake.

    Everything CMake prints is captured in the log file so that the
    summary can be inspected before spending time compiling.
    """

    def __init__(self, tools, options, toolchain, host):
        self.tools = tools
        self.options = options
        self.toolchain = toolchain
        self.host = host

    def _log(self, line):
        log.info(line)
        with open(self.options.logfile, "a") as f:
            f.write(line + "\n")

    def _read_log(self):
        with open(self.options.logfile, "r", errors="ignore") as f:
            return f.read().splitlines()

    def configure(self):
        logfile = self.options.logfile
        if self.tools.exists(logfile):
            with raise_error_on_exception("Couldn't remove \"{0}\" from a previous run. Can't continue.", logfile):
                self.tools.unlink(logfile)
        raise_error_if(
            self.tools.exists(logfile),
            "Couldn't remove \"{0}\" from a previous run. Can't continue.", logfile)

        self._log("JAVA_HOME: \"{0}\"".format(self.toolchain.java_home))

        install_prefix = self.host.cwpath(self.tools, self.options.installdir)
        cmd = [self.toolchain.cmake] + configure_args(self.options, install_prefix, self.host.cmake_arch)
        self._log(utils.format_command(cmd))

        with self.tools.cwd(self.options.builddir), open(logfile, "a") as tee:
            with raise_error_on_exception("The CMake step seems to have failed. I can't continue."):
                self.tools.run(cmd, tee=tee)

    def check_wrappers(self):
        if not java_wrappers_enabled(self._read_log()):
            raise_error(WRAPPERS_HINT)

    def build_tool(self):
        make = find_build_tool(self._read_log())
        raise_error_if(
            not make,
            "Couldn't find the native build tool in \"{0}\".", self.options.logfile)
        return self.host.cpath(self.tools, make)

    def build(self):
        cmd = build_command(self.build_tool(), self.options.jobs)
        self._log("Building using:")
        self._log(utils.format_command(cmd))

        with self.tools.cwd(self.options.builddir):
            with raise_error_on_exception("The make step seems to have failed. I can't continue."):
                self.tools.run(cmd)
