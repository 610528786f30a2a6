from .error import CvBuildError
from .error import CvBuildCommandError

from .options import BuildConfiguration
from .tools import Tools

from .version import __version__

__all__ = (
    "BuildConfiguration",
    "CvBuildCommandError",
    "CvBuildError",
    "Tools",
    "__version__",
)

name = "cvbuild"
