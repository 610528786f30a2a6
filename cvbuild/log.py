import glob
import logging
import os
import sys
import traceback
from datetime import datetime

import tqdm

from cvbuild import colors
from cvbuild import config
from cvbuild import filesystem as fs
from cvbuild import utils
from cvbuild.error import CvBuildError


################################################################################

EXCEPTION = 5
DEBUG = logging.DEBUG
VERBOSE = 15
STDOUT = 17
STDERR = 18
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
SILENCE = logging.CRITICAL + 10

logging.addLevelName(VERBOSE, "VERBOSE")
logging.addLevelName(STDOUT, "STDOUT")
logging.addLevelName(STDERR, "STDERR")
logging.addLevelName(EXCEPTION, "EXCEPT")

logging.raiseExceptions = False


class Formatter(logging.Formatter):
    def __init__(self, fmt, *args, **kwargs):
        super(Formatter, self).__init__(*args, **kwargs)
        self.fmt = fmt

    def format(self, record):
        try:
            record.message = record.msg.format(*record.args)
        except Exception:
            record.message = record.msg
        record.asctime = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")
        return self.fmt.format(
            levelname=record.levelname,
            message=record.message,
            asctime=record.asctime
        )


class ConsoleFormatter(logging.Formatter):
    def __init__(self, fmt_prefix, fmt_noprefix, *args, **kwargs):
        super(ConsoleFormatter, self).__init__(*args, **kwargs)
        self.fmt_prefix = fmt_prefix
        self.fmt_noprefix = fmt_noprefix

    def format(self, record):
        try:
            msg = record.msg.format(*record.args)
        except Exception:
            msg = record.msg
        if record.levelno >= ERROR:
            msg = colors.red(msg)
        elif record.levelno >= WARNING:
            msg = colors.yellow(msg)
        record.message = msg

        # Subprocess output is printed as is
        if record.levelno in [STDOUT, STDERR]:
            fmt = self.fmt_noprefix
        else:
            fmt = self.fmt_prefix

        return fmt.format(
            levelname=record.levelname,
            message=record.message,
        )


class Filter(logging.Filter):
    def __init__(self, filterfn):
        self.filterfn = filterfn

    def filter(self, record):
        return self.filterfn(record)


class TqdmStream(object):
    def __init__(self, stream):
        self.stream = stream

    def write(self, msg):
        with tqdm.tqdm.external_write_mode(file=self.stream, nolock=False):
            self.stream.write(msg)

    def flush(self):
        getattr(self.stream, 'flush', lambda: None)()


# silence root logger
_root = logging.getLogger()
_root.setLevel(logging.CRITICAL)

# create cvbuild logger and protect its methods against interrupts
_logger = logging.getLogger('cvbuild')
_logger.setLevel(EXCEPTION)
_logger.propagate = False
_logger.handle = utils.delay_interrupt(_logger.handle)
_logger.log = utils.delay_interrupt(_logger.log)


_console_formatter = ConsoleFormatter('[{levelname:>7}] {message}', '{message}')


class _StdStream(object):
    """ Resolves sys.stdout/sys.stderr at write time. """

    def __init__(self, name):
        self.name = name

    @property
    def stream(self):
        stream = getattr(sys, self.name)
        if stream.isatty():
            return TqdmStream(stream)
        return stream

    def write(self, msg):
        self.stream.write(msg)

    def flush(self):
        self.stream.flush()


_stdout = logging.StreamHandler(_StdStream("stdout"))
_stdout.setFormatter(_console_formatter)
_stdout.addFilter(Filter(lambda r: r.levelno < ERROR))
_stdout.addFilter(Filter(lambda r: r.levelno != EXCEPTION))

_stderr = logging.StreamHandler(_StdStream("stderr"))
_stderr.setFormatter(_console_formatter)
_stderr.addFilter(Filter(lambda r: r.levelno >= ERROR))

_logger.addHandler(_stdout)
_logger.addHandler(_stderr)

_file_formatter = Formatter('{asctime} [{levelname:>7}] {message}')
_file = None


def start_file_log():
    """ Start logging everything to a timestamped file in the log directory.

    The oldest files are removed so that no more than ``cvbuild.logcount``
    files are kept.
    """
    global _file

    if _file is not None:
        return _file.baseFilename

    logpath = config.get_logpath()
    logcount = config.getint("cvbuild", "logcount", os.environ.get("CVBUILD_LOGCOUNT", 100))
    fs.makedirs(logpath)

    logfiles = list(sorted(glob.glob(fs.path.join(logpath, "*T*.log"))))
    if logcount > 0 and len(logfiles) >= logcount:
        for file in logfiles[:len(logfiles) - logcount + 1]:
            fs.unlink(file, ignore_errors=True)

    current_time = datetime.now().strftime("%Y-%m-%dT%H%M%S.%f")
    _file = logging.FileHandler(fs.path.join(logpath, f"{current_time}.log"))
    _file.setLevel(EXCEPTION)
    _file.setFormatter(_file_formatter)
    _logger.addHandler(_file)
    return _file.baseFilename


def info(fmt, *args, **kwargs):
    _logger.log(INFO, fmt, *args, **kwargs)


def warning(fmt, *args, **kwargs):
    _logger.log(WARNING, fmt, *args, **kwargs)


def verbose(fmt, *args, **kwargs):
    _logger.log(VERBOSE, fmt, *args, **kwargs)


def debug(fmt, *args, **kwargs):
    _logger.log(DEBUG, fmt, *args, **kwargs)


def error(fmt, *args, **kwargs):
    _logger.log(ERROR, fmt, *args, **kwargs)


def stdout(line, **kwargs):
    line = line.replace("{", "{{")
    line = line.replace("}", "}}")
    _logger.log(STDOUT, line, extra=kwargs)


def stderr(line, **kwargs):
    line = line.replace("{", "{{")
    line = line.replace("}", "}}")
    _logger.log(STDERR, line, extra=kwargs)


def format_exception_msg(exc):
    if isinstance(exc, CvBuildError):
        return str(exc)

    te = traceback.TracebackException.from_exception(exc)
    if not te.stack:
        return "{}: {}".format(type(exc).__name__, str(exc))

    filename = fs.path.relpath(
        te.stack[-1].filename,
        fs.path.commonprefix([os.getcwd(), te.stack[-1].filename]))
    return "{}: {} ({}, line {}, in {})".format(
        type(exc).__name__,
        str(exc) or te.stack[-1].line,
        filename,
        te.stack[-1].lineno,
        te.stack[-1].name)


def exception(exc=None, error=True):
    if exc:
        if error:
            _logger.log(ERROR, format_exception_msg(exc))
        backtrace = "".join(traceback.format_exception(type(exc), value=exc, tb=exc.__traceback__))
    else:
        backtrace = traceback.format_exc()

    for line in backtrace.splitlines():
        line = line.replace("{", "{{")
        line = line.replace("}", "}}")
        _logger.log(EXCEPTION, line.rstrip())


def set_level(level):
    """ Set the log level for terminal output. """

    if level not in [
        DEBUG,
        ERROR,
        EXCEPTION,
        INFO,
        SILENCE,
        STDERR,
        STDOUT,
        VERBOSE,
        WARNING,
    ]:
        raise ValueError("invalid log level")

    _stdout.setLevel(level)
    _stderr.setLevel(level)


set_level(STDOUT)
