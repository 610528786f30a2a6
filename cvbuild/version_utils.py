import re

from cvbuild import log
from cvbuild.error import raise_error_if


class version(object):
    """ A major.minor.patch release identifier, e.g. ``3.4.2``. """

    def __init__(self, verstr):
        if type(verstr) is str:
            match = re.match(r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$", verstr)
            if not match:
                raise ValueError(verstr)
            values = match.groupdict()
            self.major = int(values["major"])
            self.minor = int(values["minor"])
            self.patch = int(values["patch"])
            self.string = verstr
        elif type(verstr) is tuple:
            if len(verstr) != 3:
                raise ValueError(verstr)
            self.major, self.minor, self.patch = verstr
            self.string = f"{self.major}.{self.minor}.{self.patch}"
        else:
            raise ValueError(verstr)

    def __str__(self):
        return self.string

    def __repr__(self):
        return str(self)

    def _key(self):
        return (self.major, self.minor, self.patch)

    def __eq__(self, other):
        if not isinstance(other, version):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __lt__(self, other):
        if not isinstance(other, version):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other):
        if not isinstance(other, version):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other):
        if not isinstance(other, version):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other):
        if not isinstance(other, version):
            return NotImplemented
        return self._key() >= other._key()

    @property
    def short(self):
        """ Digits only, e.g. ``342`` for ``3.4.2``. """
        return f"{self.major}{self.minor}{self.patch}"


class minimum(object):
    """ A major.minor lower bound. Patch levels are not considered. """

    def __init__(self, verstr):
        match = re.match(r"^(?P<major>\d+)\.(?P<minor>\d+)(\.\d+)?$", verstr)
        if not match:
            raise ValueError(verstr)
        self.major = int(match.group("major"))
        self.minor = int(match.group("minor"))

    def __str__(self):
        return f"{self.major}.{self.minor}.x"


def is_too_old(ver, min_ver):
    """ True if ``ver`` is below the major.minor bound ``min_ver``. """
    if min_ver.major > ver.major:
        return True
    return min_ver.major == ver.major and min_ver.minor > ver.minor


class VersionGate(object):
    """ Decides whether a requested version may be built and patched.

    Versions below the minimum can't be used to build the native
    extensions, so they are only allowed when packaging is skipped.
    A single exact version needs a known upstream commit cherry-picked
    on top of its tag.
    """

    def __init__(self, min_version, patch_version):
        self.min_version = minimum(min_version)
        self.patch_version = patch_version

    def check(self, options):
        ver = options.version
        if not is_too_old(ver, self.min_version):
            return True

        log.warning(
            "The version you're building ({0}) is lower than the minimum version "
            "allowed ({1}) to build the native extensions.", ver, self.min_version)
        raise_error_if(
            not options.skip_packaging,
            "Version {0} is too old to package. Supply \"--skip-packaging\" "
            "to build it without the native extensions.", ver)
        return False

    def needs_patch(self, options):
        if options.skip_checkout or is_too_old(options.version, self.min_version):
            return False
        return str(options.version) == self.patch_version
