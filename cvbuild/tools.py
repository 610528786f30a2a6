import copy
import glob
import os
import shutil
import subprocess
import sys
import threading
if os.name != "nt":
    import termios
from contextlib import contextmanager
from psutil import NoSuchProcess, Process

from cvbuild import config
from cvbuild import filesystem as fs
from cvbuild import log
from cvbuild import utils
from cvbuild.error import CvBuildCommandError
from cvbuild.error import raise_error, raise_error_if


class Reader(threading.Thread):
    def __init__(self, stream, output=None, logbuf=None, tee=None, lock=None):
        super(Reader, self).__init__()
        self.output = output
        self.stream = stream
        self.logbuf = logbuf if logbuf is not None else []
        self.tee = tee
        self.lock = lock or threading.Lock()
        self.start()

    def run(self):
        line = ""
        try:
            for line in iter(self.stream.readline, b''):
                line = line.rstrip().decode(errors='ignore')
                with self.lock:
                    if self.output:
                        self.output(line)
                    if self.tee is not None:
                        self.tee.write(line + "\n")
                    self.logbuf.append((self, line))
        except Exception as e:
            if self.output:
                self.output(str(e))
            self.logbuf.append((self, line))


def _terminate(pid):
    try:
        process = Process(pid)
        for chld in process.children(recursive=True):
            chld.terminate()
        process.terminate()
    except NoSuchProcess:
        pass


def _run(cmd, cwd, env, **kwargs):
    output = kwargs.get("output")
    output_on_error = kwargs.get("output_on_error")
    tee = kwargs.get("tee")
    output = output if output is not None else True
    output = False if output_on_error else output

    log.debug("Running: '{0}' (CWD: {1})", utils.format_command(cmd), cwd)
    try:
        with utils.delayed_interrupt():
            p = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=cwd,
                env=env,
            )
    except OSError as e:
        raise CvBuildCommandError(
            "Command failed: {0} ({1})".format(
                utils.format_command(cmd), e.strerror or e),
            [], [], None) from e

    lock = threading.Lock()
    logbuf = []
    stdout = Reader(
        p.stdout,
        output=log.stdout if output else None,
        logbuf=logbuf,
        tee=tee,
        lock=lock)
    stderr = Reader(
        p.stderr,
        output=log.stderr if output else None,
        logbuf=logbuf,
        tee=tee,
        lock=lock)

    try:
        p.wait()
    except KeyboardInterrupt:
        _terminate(p.pid)
        p.wait()
        raise
    finally:
        stdout.join()
        stderr.join()
        p.stdout.close()
        p.stderr.close()

    if p.returncode != 0 and output_on_error:
        for reader, line in logbuf:
            if reader is stdout:
                log.stdout(line)
            else:
                log.stderr(line)

    stdoutbuf = [line for reader, line in logbuf if reader is stdout]
    stderrbuf = [line for reader, line in logbuf if reader is stderr]

    if p.returncode != 0:
        raise CvBuildCommandError(
            "Command failed: {0}".format(utils.format_command(cmd)),
            stdoutbuf, stderrbuf, p.returncode)
    return "\n".join(stdoutbuf)


class Tools(object):
    """ A collection of useful tools.

    Commands are run in the tools object's working directory and
    environment, neither of which are shared with the cvbuild process.
    Relative paths are made absolute by prepending the current working
    directory.
    """

    def __init__(self, cwd=None, env=None):
        self._cwd = fs.path.normpath(fs.path.join(config.get_workdir(), cwd or config.get_workdir()))
        self._env = copy.deepcopy(env if env is not None else dict(os.environ))

    @contextmanager
    def cwd(self, pathname, *args):
        """ Change the current working directory to the specified path.

        This function doesn't change the working directory of the cvbuild
        process. It only changes the working directory for tools within
        the tools object.

        Args:
            pathname (str): Path to change to.
        """
        path = self.expand_path(fs.path.join(str(pathname), *args))
        prev = self._cwd
        try:
            raise_error_if(
                not fs.path.exists(path) or not fs.path.isdir(path),
                "Couldn't change directory to '{0}'. Do I have permissions?", path)
            self._cwd = path
            yield fs.path.normpath(self._cwd)
        finally:
            self._cwd = prev

    @contextmanager
    def environ(self, **kwargs):
        """ Set environment variables for child processes within a context. """
        restore = {key: value for key, value in self._env.items()}

        for key, value in kwargs.items():
            if value is not None:
                self._env[key] = str(value)
            else:
                self._env.pop(key, None)

        try:
            yield self._env
        finally:
            self._env = restore

    def exists(self, pathname):
        return fs.path.exists(self.expand_path(pathname))

    def expand_path(self, pathname):
        """ Makes a relative path absolute by prepending the current working directory. """
        return fs.path.normpath(fs.path.join(self.getcwd(), str(pathname)))

    def getcwd(self):
        """ Returns the current working directory. """
        return fs.path.normpath(self._cwd)

    def getenv(self, key, default=None):
        """ Returns the value of an environment variable.

        Only child processes spawned by the same tools object can see
        the environment variables and their values returned by this method.
        """
        return self._env.get(key, default)

    def glob(self, pathname):
        """ Enumerates files and directories, recursively if the pattern contains ``**``.

        Returns:
            Sorted list of absolute pathnames.
        """
        path = self.expand_path(pathname)
        return list(sorted(glob.glob(path, recursive=True)))

    def mkdir(self, pathname):
        """ Create directory, including any missing parents. """
        pathname = self.expand_path(pathname)
        try:
            fs.makedirs(pathname)
        except OSError as e:
            raise_error("Couldn't create '{0}'. Do I have permissions? ({1})", pathname, e.strerror)

    def rmtree(self, pathname, ignore_errors=False):
        """ Removes a directory tree from disk. """
        pathname = self.expand_path(pathname)
        try:
            fs.rmtree(pathname, ignore_errors=ignore_errors)
        except OSError as e:
            raise_error("Couldn't remove '{0}' ({1})", pathname, e.strerror)

    def run(self, cmd, **kwargs):
        """
        Runs a command.

        A CvBuildCommandError exception is raised on failure, carrying
        the command's captured output and exit code.

        Args:
            cmd (list): Argument list to be executed.
            output (boolean, optional): By default, the executed command's
                output will be written to the console. Set to ``False`` to
                disable all output.
            output_on_error (boolean, optional): If ``True``, no output is
                written to the console unless the command fails.
            tee (file, optional): File object receiving every output line.

        Returns:
            str: The command's standard output.
        """
        cmd = [str(arg) for arg in cmd]

        stdi, stdo, stde = None, None, None
        try:
            if os.name != "nt":
                with utils.ignore_exception():
                    stdi = termios.tcgetattr(sys.stdin.fileno())
                    stdo = termios.tcgetattr(sys.stdout.fileno())
                    stde = termios.tcgetattr(sys.stderr.fileno())

            return _run(cmd, self._cwd, self._env, **kwargs)

        finally:
            if stdi:
                termios.tcsetattr(sys.stdin.fileno(), termios.TCSANOW, stdi)
            if stdo:
                termios.tcsetattr(sys.stdout.fileno(), termios.TCSANOW, stdo)
            if stde:
                termios.tcsetattr(sys.stderr.fileno(), termios.TCSANOW, stde)

    def setenv(self, key, value=None):
        """ Sets or unsets an environment variable for child processes. """
        if value is None:
            self._env.pop(key, None)
        else:
            self._env[key] = str(value)

    def unlink(self, pathname, ignore_errors=False):
        """ Removes a file from disk. """
        pathname = self.expand_path(pathname)
        return fs.unlink(pathname, ignore_errors=ignore_errors)

    def which(self, executable):
        """ Find executable in PATH.

        Args:
            executable (str): Name or path of executable to be found.

        Returns:
            str: Full path to the executable, or None.
        """
        return shutil.which(executable, path=self._env.get("PATH"))
