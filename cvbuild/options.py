from cvbuild import filesystem as fs


class BuildConfiguration(object):
    """ Options that control the behavior of a build.

    Constructed once from the command line and read-only afterwards.
    """

    workdir = "/tmp"
    """ Absolute path of the working directory (-w). """

    version = None
    """ Requested OpenCV version, a :class:`cvbuild.version_utils.version` (-v). """

    jobs = None
    """ Parallelism hint forwarded to the native build tool (-j). ``""`` means unbounded. """

    generator = None
    """ CMake generator (-G). """

    static = True
    """ Statically link the JNI library. """

    build_python = False
    build_samples = False
    build_cuda = False
    build_qt = False

    skip_checkout = False
    """ Reuse previously fetched sources, only wipe the build directory. """

    skip_packaging = False
    """ Stop after the native build. """

    deploy = False
    """ Ask the packager to deploy rather than install. """

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            if not hasattr(type(self), key):
                raise TypeError(f"unknown build option '{key}'")
        self.__dict__.update(kwargs)

    def __setattr__(self, name, value):
        raise AttributeError(f"build configuration is read-only ('{name}')")

    @property
    def rootdir(self):
        return fs.path.join(self.workdir, "opencv")

    @property
    def sourcedir(self):
        return fs.path.join(self.rootdir, "sources")

    @property
    def builddir(self):
        return fs.path.join(self.rootdir, "build")

    @property
    def installdir(self):
        return fs.path.join(self.rootdir, "installed")

    @property
    def logfile(self):
        return fs.path.join(self.rootdir, "cmake.out")
