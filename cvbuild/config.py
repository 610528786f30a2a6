from configparser import ConfigParser, NoOptionError, NoSectionError
import os

from cvbuild import filesystem as fs
from cvbuild.error import raise_error_if


_workdir = os.getcwd()


if os.getenv("CVBUILD_CONFIG_PATH"):
    location = fs.path.join(os.getenv("CVBUILD_CONFIG_PATH"), "config")
    location_user = fs.path.join(os.getenv("CVBUILD_CONFIG_PATH"), "user")
elif os.name == "nt":
    appdata = os.getenv("APPDATA", fs.path.join(fs.userhome(), "AppData", "Roaming"))
    location = fs.path.join(appdata, "cvbuild", "config")
    location_user = fs.path.join(appdata, "cvbuild", "user")
else:
    location = fs.path.join(fs.userhome(), ".config", "cvbuild", "config")
    location_user = fs.path.join(fs.userhome(), ".config", "cvbuild", "user")


class ConfigFile(ConfigParser):
    def __init__(self, location, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._location = location

    def load(self):
        if self._location:
            super().read(self._location)
            if not self.has_section("cvbuild"):
                self.add_section("cvbuild")

    def set(self, section, key, value):
        if not self.has_section(section):
            self.add_section(section)
        super().set(section, key, value)


class Config(object):
    def __init__(self):
        self._configs = []

    def configs(self, alias=None):
        return [config for name, config in self._configs if not alias or name == alias]

    def add_file(self, alias, location):
        file = ConfigFile(location)
        self._configs.append((alias, file))
        return file

    def get(self, section, key, default, alias=None):
        for config in reversed(self.configs(alias)):
            try:
                return config.get(section, key)
            except (NoOptionError, NoSectionError):
                continue
        return default

    def set(self, section, key, value, alias=None):
        count = 0
        for config in self.configs(alias):
            config.set(section, key, value)
            count += 1
        return count

    def load(self):
        for config in self.configs():
            config.load()


_config = Config()
_config.add_file("global", location)
_config.add_file("user", location_user)
_config.add_file("cli", None)
_config.load()


def get(section, key, default=None, alias=None):
    return _config.get(section, key, default, alias)


def getint(section, key, default=None, alias=None):
    value = get(section, key, default=default, alias=alias)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            raise_error_if(True, "Config: value '{0}' invalid for '{1}.{2}', expected integer", value, section, key)
    return None


def getboolean(section, key, default=None, alias=None):
    value = get(section, key, default=default, alias=alias)
    return value is not None and str(value).lower() in ["true", "yes", "on", "1"]


def set(section, key, value, alias=None):
    _config.set(section, key, value, alias or "cli")


def get_home():
    if os.name == "nt":
        return fs.path.join(os.getenv("LOCALAPPDATA", fs.path.join(fs.userhome(), "AppData", "Local")), "cvbuild")
    else:
        return fs.path.join(fs.userhome(), ".cvbuild")


def get_logpath():
    return fs.path.expanduser(get("cvbuild", "logpath", get_home()))


def get_workdir():
    """ Directory cvbuild was started from. """
    return _workdir


def get_min_version():
    return get("cvbuild", "min_version", "3.4")


def get_patch_version():
    return get("cvbuild", "patch_version", "3.4.0")


def get_patch_commit():
    return get("cvbuild", "patch_commit", "f3dde79ed6f5e17f16f4e2ad9669841e0dd6887c")


def get_opencv_url():
    return get("cvbuild", "opencv_url", "https://github.com/opencv/opencv.git")


def get_contrib_url():
    return get("cvbuild", "contrib_url", "https://github.com/opencv/opencv_contrib.git")


def get_package_script():
    return get("cvbuild", "package_script", fs.path.join(".", "package.sh"))


def get_tool(name):
    return get("tools", name, name)


def load_or_set(file_or_str):
    if fs.path.exists(file_or_str):
        _config.add_file("cli", file_or_str).load()
    else:
        key_value = file_or_str.split("=", 1)
        raise_error_if(len(key_value) <= 1, "Syntax error in configuration: '{}'".format(file_or_str))
        section_key = key_value[0].split(".", 1)
        raise_error_if(len(section_key) <= 1, "Syntax error in configuration: '{}'".format(file_or_str))
        _config.set(section_key[0], section_key[1], key_value[1], alias="cli")
