from cvbuild import colors
from cvbuild import config
from cvbuild import hardening
from cvbuild import log
from cvbuild import packaging
from cvbuild import utils
from cvbuild.cmake import CMakeBuild
from cvbuild.error import raise_error_on_exception
from cvbuild.host import Host
from cvbuild.sources import SourceTree
from cvbuild.toolchain import Toolchain
from cvbuild.tools import Tools
from cvbuild.version_utils import VersionGate


class Builder(object):
    """ Runs all build steps in order. The first failing step aborts the build. """

    def __init__(self, options, tools=None, host=None):
        self.options = options
        self.tools = tools or Tools()
        self.host = host or Host()
        min_version = config.get_min_version()
        with raise_error_on_exception("Config: invalid 'cvbuild.min_version' \"{0}\", expected MAJOR.MINOR", min_version):
            self.gate = VersionGate(min_version, config.get_patch_version())
        self.toolchain = Toolchain(self.tools, self.host)

    def run(self):
        options = self.options

        log.verbose("Host: {0}", self.host)
        self.gate.check(options)
        self.toolchain.resolve()

        with utils.LockFile(options.workdir, log.info, "Working directory is locked by another process, please wait..."):
            SourceTree(self.tools, options, self.toolchain.git, patch=self.gate.needs_patch(options)).prepare()
            self.toolchain.resolve_java_home()

            cmake = CMakeBuild(self.tools, options, self.toolchain, self.host)
            cmake.configure()
            cmake.check_wrappers()
            cmake.build()

            hardening.harden(self.tools, self.host, options.installdir)

            if not options.skip_packaging:
                packaging.package(self.tools, options, self.toolchain)

        log.info(colors.green("OpenCV {0} installed in {1}"), options.version, options.installdir)
