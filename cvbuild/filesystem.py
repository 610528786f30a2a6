import os
import errno
import shutil


path = os.path


def userhome():
    return os.path.expanduser("~")


def makedirs(path):
    try:
        os.makedirs(path)
    except OSError as e:
        if e.errno != errno.EEXIST:
            raise


def realpath(path):
    return os.path.realpath(path)


def rmtree(path, ignore_errors=False, onerror=None):
    def _onerror(func, path, exc_info):
        if os.path.isdir(path):
            try:
                os.rmdir(path)
            except OSError:
                pass
            else:
                return
        if not ignore_errors:
            _, exc, _ = exc_info
            raise exc

    if not os.path.lexists(path):
        return
    shutil.rmtree(path, onerror=onerror or _onerror)


def unlink(path, ignore_errors=False):
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            rmtree(path, ignore_errors=ignore_errors)
        else:
            os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError:
        if not ignore_errors:
            raise
