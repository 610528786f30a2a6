import contextlib
import os
import signal
from functools import wraps

from fasteners import process_lock


def ignore_exception(exc=Exception):
    return contextlib.suppress(exc)


class SignalHandler(object):
    def __init__(self, signum):
        self.original_handler = signal.signal(signum, self._handler)
        self.handlers = []

    def _handler(self, signum, frame):
        for handler in self.handlers:
            handler.add_signal(signum, frame)
        if not self.handlers and self.original_handler:
            self.original_handler(signum, frame)

    def new_monitor(self):
        class Finalizer(object):
            def __init__(self, handler):
                self.handler = handler
                self.signals = []

            def add_signal(self, signum, frame):
                self.signals.append((signum, frame))

            def __call__(self):
                self.handler.handlers.remove(self)
                for signum, frame in self.signals:
                    self.handler.original_handler(signum, frame)

        finalizer = Finalizer(self)
        self.handlers.append(finalizer)
        return finalizer


sigint_handler = SignalHandler(signal.SIGINT)


@contextlib.contextmanager
def delayed_interrupt():
    """ A context manager that delays SIGINT until after the code block. """

    finalize = sigint_handler.new_monitor()
    try:
        yield
    finally:
        finalize()


def delay_interrupt(func):
    @wraps(func)
    def _f(*args, **kwargs):
        with delayed_interrupt():
            return func(*args, **kwargs)
    return _f


class LockFile(object):
    """ Inter-process lock on a directory.

    If the lock is already held by another process, ``logfunc`` is
    called with the remaining arguments before blocking.
    """

    def __init__(self, path, logfunc=None, *args, **kwargs):
        self._file = process_lock.InterProcessLock(os.path.join(path, ".cvbuild.lock"))
        if not self._file.acquire(blocking=False):
            if logfunc is not None:
                logfunc(*args, **kwargs)
            self._file.acquire()

    def close(self):
        self._file.release()

    def __enter__(self, *args, **kwargs):
        return self

    def __exit__(self, *args, **kwargs):
        self.close()


def quote(value, char='"'):
    return f"{char}{value}{char}" if value is not None else None


def format_command(cmd):
    """ Render an argument list the way a shell user would type it. """
    return " ".join(quote(arg) if " " in arg or not arg else arg for arg in cmd)
