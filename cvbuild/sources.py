from cvbuild import config
from cvbuild import filesystem as fs
from cvbuild import log
from cvbuild.error import raise_error_on_exception


class SourceTree(object):
    """ Fetches the OpenCV sources and prepares the build directory.

    Layout below the working directory::

        opencv/
          sources/opencv
          sources/opencv_contrib
          build/
    """

    def __init__(self, tools, options, git, patch=False):
        self.tools = tools
        self.options = options
        self.git = git
        self.patch = patch

    def prepare(self):
        if self.options.skip_checkout:
            self.clean_build()
        else:
            self.checkout()

    def clean_build(self):
        """ Wipe the build directory, keeping previously fetched sources. """
        log.info("Skipping checkout, reusing sources in {0}", self.options.sourcedir)
        self.tools.rmtree(self.options.builddir)
        self.tools.mkdir(self.options.builddir)

    def checkout(self):
        version = str(self.options.version)

        self.tools.rmtree(self.options.rootdir)
        self.tools.mkdir(self.options.sourcedir)
        self.tools.mkdir(self.options.builddir)

        with self.tools.cwd(self.options.sourcedir):
            self.clone(config.get_opencv_url(), version)
            if self.patch:
                self.cherry_pick(fs.path.join(self.options.sourcedir, "opencv"), config.get_patch_commit())
            self.clone(config.get_contrib_url(), version)

    def clone(self, url, tag):
        name = repository_name(url)
        log.info("Cloning {0}", url)
        with raise_error_on_exception("Failed to clone the {0} repo using \"{1} clone {2}\"", name, self.git, url):
            self.tools.run([self.git, "clone", url])
        with self.tools.cwd(name):
            with raise_error_on_exception("Failed to check out the tag {0} for {1}", tag, name):
                self.tools.run([self.git, "checkout", tag])

    def cherry_pick(self, path, commit):
        log.info("Applying patch for building a FAT jar.")
        with self.tools.cwd(path):
            with raise_error_on_exception("Failed to cherry-pick {0} onto {1}", commit, path):
                self.tools.run([self.git, "cherry-pick", commit])


def repository_name(url):
    """ Directory name git clones ``url`` into. """
    name = url.rstrip("/").rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[:-4]
    return name
