import click
import os
import sys

from cvbuild import config
from cvbuild import filesystem as fs
from cvbuild import log
from cvbuild import __version__
from cvbuild.builder import Builder
from cvbuild.options import BuildConfiguration
from cvbuild.version_utils import version


ENVIRONMENT_HELP = """
\b
Environment:
  GIT=/path/to/git        git executable, "git" from PATH by default
  CMAKE=/path/to/cmake    cmake executable, "cmake" from PATH by default
  MVN=/path/to/mvn        mvn executable, "mvn" from PATH by default
  JAVA_HOME=/path/to/jdk  JDK root, inferred from the "java" executable
                          on PATH by default
"""


def _parse_version(ctx, param, value):
    if value is None:
        return None
    try:
        return version(value)
    except ValueError:
        raise click.BadParameter(
            f"'{value}' is not a valid version, expected MAJOR.MINOR.PATCH (e.g. \"3.4.2\")")


def _parse_jobs(ctx, param, value):
    if value is None or value == "" or value.isdigit():
        return value
    raise click.BadParameter(f"'{value}' is not a number of jobs")


@click.command(context_settings=dict(help_option_names=["-h", "-?", "-help", "--help"]),
               epilog=ENVIRONMENT_HELP)
@click.option("-v", "--opencv-version", "opencv_version", required=True, callback=_parse_version,
              metavar="VERSION", help="OpenCV version to build, e.g. \"3.4.2\".")
@click.option("-w", "--workdir", default="/tmp", show_default=True,
              type=click.Path(exists=True, file_okay=False, writable=True, resolve_path=True),
              help="Working directory.")
@click.option("-j", "jobs", is_flag=False, flag_value="", default=None, callback=_parse_jobs,
              metavar="[N]",
              help="Number of jobs for make, e.g. -j8. With Visual Studio this "
                   "translates to the /m option of msbuild.")
@click.option("-G", "--generator", type=str, help="CMake generator. The CMake default is used otherwise.")
@click.option("-sc", "--skip-checkout", is_flag=True,
              help="Reuse the sources checked out by a previous run in the same working "
                   "directory. Only the build directory is wiped.")
@click.option("-sp", "--skip-packaging", is_flag=True,
              help="Only build OpenCV and the contrib modules, don't package them.")
@click.option("--static/--no-static", "-static/-no-static", default=True,
              help="Statically (default) or dynamically link the JNI library.")
@click.option("-bp", "--build-python", is_flag=True, help="Build the Python wrappers.")
@click.option("--build-samples", is_flag=True, help="Build the OpenCV samples.")
@click.option("--build-cuda-support", "build_cuda", is_flag=True,
              help="Build with NVidia's CUDA. CUDA must already be installed.")
@click.option("--build-qt-support", "build_qt", is_flag=True,
              help="Build with QT as GUI implementation. QT5 must already be installed.")
@click.option("--deploy", is_flag=True, help="Deploy rather than install the packages.")
@click.option("-c", "--config", "config_files", multiple=True, type=str,
              help="Load a configuration file or set a configuration key (section.key=value).")
@click.option("--verbose", count=True, help="Verbose output (repeat to raise verbosity).")
def cli(opencv_version, workdir, jobs, generator, skip_checkout, skip_packaging, static,
        build_python, build_samples, build_cuda, build_qt, deploy, config_files, verbose):
    """
    Build OpenCV and opencv_contrib from source and package the result.

    The sources of the requested version are cloned into
    WORKDIR/opencv/sources, configured and built in WORKDIR/opencv/build
    and installed into WORKDIR/opencv/installed. The CMake output is kept
    in WORKDIR/opencv/cmake.out.
    """

    if verbose >= 2:
        log.set_level(log.DEBUG)
    elif verbose >= 1:
        log.set_level(log.VERBOSE)

    for config_file in config_files:
        log.verbose("Config: {0}", config_file)
        config.load_or_set(config_file)

    log.start_file_log()

    log.verbose("cvbuild version: {}", __version__)
    log.verbose("cvbuild command: {}", " ".join([fs.path.basename(sys.argv[0])] + sys.argv[1:]))
    log.verbose("cvbuild host: {}", os.environ.get("HOSTNAME", "localhost"))

    options = BuildConfiguration(
        workdir=workdir,
        version=opencv_version,
        jobs=jobs,
        generator=generator,
        static=static,
        build_python=build_python,
        build_samples=build_samples,
        build_cuda=build_cuda,
        build_qt=build_qt,
        skip_checkout=skip_checkout,
        skip_packaging=skip_packaging,
        deploy=deploy,
    )

    Builder(options).run()
