from cvbuild import filesystem as fs
from cvbuild import log
from cvbuild.error import CvBuildCommandError


JAVA_LIBRARY_PATTERN = "libopencv_java*.so"


def find_java_library(tools, installdir):
    libraries = tools.glob(fs.path.join(installdir, "**", JAVA_LIBRARY_PATTERN))
    return libraries[0] if libraries else None


def harden(tools, host, installdir):
    """ Mark the stack of the installed JNI library as non-executable.

    Best effort: only done on Linux, and only warns if ``execstack``
    or the library is missing.

    Returns:
        bool: True if the library was hardened.
    """
    if not host.linux:
        return False

    execstack = tools.which("execstack")
    if execstack is None:
        log.warning("NOT applying overrun protection. You should install 'execstack' "
                    "using 'sudo apt-get install execstack'. Continuing...")
        return False

    library = find_java_library(tools, installdir)
    if library is None:
        log.warning("I should have been able to apply buffer overrun protection to the "
                    "shared lib in \"{0}\" but I couldn't find it.", installdir)
        return False

    log.info("Applying buffer overrun protection to \"{0}\"", library)
    try:
        tools.run([execstack, "-c", library])
    except CvBuildCommandError as e:
        log.warning("Failed to apply buffer overrun protection to \"{0}\" ({1})", library, e)
        return False
    return True
