from cvbuild import config
from cvbuild import filesystem as fs
from cvbuild import log
from cvbuild.error import CvBuildCommandError
from cvbuild.error import raise_error, raise_error_if


def resolve_tool(tools, name, envvar):
    """ Locate an external tool and make sure it works.

    The ``envvar`` environment variable takes precedence over the
    ``tools.<name>`` configuration key, which in turn takes precedence
    over looking up ``name`` in PATH.
    """
    path = tools.getenv(envvar) or config.get_tool(name)
    try:
        tools.run([path, "--version"], output=False)
    except CvBuildCommandError:
        raise_error("Cannot find \"{0}\" command. Set {1} to its location.", path, envvar)
    log.verbose("Using {0}: {1}", name, path)
    return path


def find_java_home(java):
    """ Infer the JDK root from the path of a java executable.

    Symlinks are followed to the real executable, then the directory
    tree is walked upwards until a directory with a ``java`` or ``jre``
    subdirectory is found.
    """
    location = fs.realpath(java)
    cdir = fs.path.dirname(location)
    while True:
        if fs.path.isdir(fs.path.join(cdir, "java")) or fs.path.isdir(fs.path.join(cdir, "jre")):
            return cdir
        parent = fs.path.dirname(cdir)
        raise_error_if(
            parent == cdir,
            "Can't automatically locate the correct JAVA_HOME from '{0}'. Please set it explicitly.",
            location)
        cdir = parent


class Toolchain(object):
    """ Paths to the external programs driven by a build. """

    def __init__(self, tools, host):
        self.tools = tools
        self.host = host
        self.git = None
        self.cmake = None
        self.mvn = None
        self.java_home = None

    def resolve(self):
        self.git = resolve_tool(self.tools, "git", "GIT")
        self.cmake = resolve_tool(self.tools, "cmake", "CMAKE")
        self.mvn = resolve_tool(self.tools, "mvn", "MVN")
        return self

    def resolve_java_home(self):
        java_home = self.tools.getenv("JAVA_HOME")
        if not java_home:
            java = self.tools.which("java")
            raise_error_if(
                java is None,
                "There's no java command available and JAVA_HOME isn't set.")
            java_home = self.host.cpath(self.tools, find_java_home(java))
            log.info("JAVA_HOME: {0}", java_home)
        self.java_home = java_home
        self.tools.setenv("JAVA_HOME", java_home)
        return java_home

    def environ(self):
        """ Variables exported to the packaging step. """
        return {
            "GIT": self.git,
            "CMAKE": self.cmake,
            "MVN": self.mvn,
            "JAVA_HOME": self.java_home,
        }
