class CvBuildError(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class CvBuildCommandError(CvBuildError):
    def __init__(self, what, stdout=[], stderr=[], returncode=None, *args, **kwargs):
        super().__init__(what, *args, **kwargs)
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode


def raise_error(msg, *args, **kwargs):
    raise CvBuildError(msg.format(*args, **kwargs))


def raise_error_if(condition, *args, **kwargs):
    if condition:
        raise_error(*args, **kwargs)


class raise_error_on_exception(object):
    def __init__(self, message, *args, **kwargs):
        self.message = message
        self.args = args
        self.kwargs = kwargs

    def __enter__(self):
        return self

    def __exit__(self, type, value, tb):
        if isinstance(value, Exception):
            raise CvBuildError(self.message.format(*self.args, **self.kwargs)) from value
