from setuptools import setup, find_packages
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))
name = "cvbuild"
exec(open("cvbuild/version.py").read())


# Get the long description from the README file
with open(path.join(here, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

try:
    with open(path.join(here, "requirements.txt"), encoding="utf-8") as f:
        pinned_reqs = f.readlines()
except FileNotFoundError:
    pinned_reqs = []


setup(
    name=name,
    version=__version__,
    python_requires=">=3.8",
    description="Builds OpenCV with its contrib modules and packages the JNI libraries",
    long_description=long_description,
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Java",
        "Programming Language :: Python :: 3",
    ],
    keywords=[
        "build",
        "cmake",
        "jni",
        "maven",
        "msbuild",
        "opencv",
    ],
    packages=find_packages(exclude=["contrib", "docs", "tests"]),
    install_requires=pinned_reqs or [
        "click>=8.1",
        "colorama",
        "fasteners",
        "psutil",
        "tqdm",
    ],
    dependency_links=[],
    extras_require={
        "test": ["pytest", "coverage"],
    },
    entry_points={
        "console_scripts": [
            "cvbuild=cvbuild.__main__:main",
        ],
    },
)
