from cvbuild import config
from cvbuild import log
from cvbuild.error import raise_error_on_exception


def package_command(script, deploy=False):
    cmd = [script]
    if deploy:
        cmd.append("--deploy")
    return cmd


def package(tools, options, toolchain):
    """ Hand the install tree over to the packaging script.

    The script is resolved relative to the directory cvbuild was started
    from and receives the install location in ``OPENCV_INSTALL``.
    """
    script = config.get_package_script()
    env = toolchain.environ()
    env.update(
        OPENCV_INSTALL=options.installdir,
        OPENCV_VERSION=str(options.version),
        OPENCV_SHORT_VERSION=options.version.short,
    )

    log.info("Packaging {0}", options.installdir)
    with tools.cwd(config.get_workdir()), tools.environ(**env):
        with raise_error_on_exception("The packaging step seems to have failed. I can't continue."):
            tools.run(package_command(script, options.deploy))
