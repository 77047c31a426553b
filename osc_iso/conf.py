# Copyright (C) 2006-2009 Novell Inc.  All rights reserved.
# This program is free software; it may be used, copied, modified
# and distributed under the terms of the GNU General Public Licence,
# either version 2, or (at your option) any later version.

"""
This module reads and holds the configuration of osc-iso.

The configuration options are loaded with the following priority:
    1. environment variables: ``OSC_ISO_<uppercase_option>``
    2. override arguments provided to ``get_config()``
    3. the config file (INI format, ``[general]`` section)
    4. built-in defaults

The defaults describe the CaaSP 1.0 DVD product build. Credentials for the
build service are not handled here, ``osc`` reads them from its own oscrc.
"""


import configparser
import os
import sys

from . import oscerr
from .util import xdg


DEFAULTS = {
    "apiurl": "https://api.suse.de",
    "project": "Devel:CASP:1.0:ControllerNode",
    "package": "_product:CAASP-dvd5-DVD-x86_64",
    "kiwi": "CAASP-dvd5-DVD-x86_64.kiwi",
    "repository": "images",
    "arch": "x86_64",
    # directory the product gets checked out to
    "workdir": ".",
    # empty means <workdir>/.cache
    "cache_dir": "",
    "chroot_dir": "/var/tmp/build-root/images-x86_64",
    "iso_path": "/var/tmp/build-root/images-x86_64/usr/src/packages/KIWI/SUSE-CaaS-Platform-1.0-DVD-x86_641.iso",
    "use_sudo": True,
    "gpg_key_type": "DSA",
    "gpg_key_length": 1024,
    "gpg_subkey_type": "ELG-E",
    "gpg_subkey_length": 1024,
    "gpg_name_real": "ACME ISO Generation",
    "gpg_name_email": "acme-iso-generation@example.com",
    "gpg_expire_date": "0",
    "debug": False,
    "verbose": False,
    "traceback": False,
}

boolean_opts = ["use_sudo", "debug", "verbose", "traceback"]
integer_opts = ["gpg_key_length", "gpg_subkey_length"]

new_conf_template = """
[general]
# URL of the build service API, credentials are kept in the osc config
apiurl = %(apiurl)s

# product to check out and build
project = %(project)s
package = %(package)s
kiwi = %(kiwi)s
repository = %(repository)s
arch = %(arch)s

# build root used by 'osc build' and the resulting image
chroot_dir = %(chroot_dir)s
iso_path = %(iso_path)s
"""

config_incomplete_text = """

Your configuration file %s is not complete.
Make sure that it has a [general] section.
(You can copy&paste the below. Some commented defaults are shown.)

"""


# the running configuration; get_config() replaces its content
config = DEFAULTS.copy()


def identify_conf():
    if "OSC_ISO_CONFIG" in os.environ:
        return os.environ.get("OSC_ISO_CONFIG")
    return os.path.join(xdg.XDG_CONFIG_HOME, "osc-iso", "osc-isorc")


def _convert(key, value, fname):
    if key in boolean_opts:
        if isinstance(value, bool):
            return value
        state = configparser.ConfigParser.BOOLEAN_STATES.get(str(value).strip().lower())
        if state is None:
            raise oscerr.ConfigError(f"option '{key}' requires a boolean value, got '{value}'", fname)
        return state

    if key in integer_opts:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise oscerr.ConfigError(f"option '{key}' requires an integer value, got '{value}'", fname)

    return value


def _read_conffile(conffile, required):
    """
    Return the ``[general]`` options of ``conffile`` as a dict.
    """
    conffile = os.path.expanduser(conffile)
    if not os.path.exists(conffile):
        if required:
            raise oscerr.NoConfigfile(conffile, "the config file given on the command line does not exist")
        return {}

    cp = configparser.ConfigParser(interpolation=None)
    try:
        cp.read(conffile)
    except configparser.Error as e:
        raise oscerr.ConfigError(str(e), conffile)

    if not cp.has_section("general"):
        msg = config_incomplete_text % conffile
        msg += new_conf_template % DEFAULTS
        raise oscerr.ConfigError(msg, conffile)

    result = {}
    for key, value in cp.items("general"):
        if key not in DEFAULTS:
            raise oscerr.ConfigError(f"unknown option '{key}'", conffile)
        result[key] = value
    return result


def get_config(override_conffile=None,
               override_apiurl=None,
               override_debug=None,
               override_verbose=None,
               override_traceback=None,
               overrides=None,
               ):
    """
    Configure osc-iso and return the resulting ``config`` dict.
    """

    if overrides:
        overrides = overrides.copy()
    else:
        overrides = {}

    if override_apiurl is not None:
        overrides["apiurl"] = override_apiurl

    if override_debug is not None:
        overrides["debug"] = override_debug

    if override_verbose is not None:
        overrides["verbose"] = override_verbose

    if override_traceback is not None:
        overrides["traceback"] = override_traceback

    if override_conffile is not None:
        conffile = override_conffile
        required = conffile not in ["", "/dev/null"]
    else:
        conffile = identify_conf()
        required = False

    values = DEFAULTS.copy()
    if conffile not in ["", "/dev/null"]:
        values.update(_read_conffile(conffile, required))

    for key, value in overrides.items():
        if key not in DEFAULTS:
            raise oscerr.ConfigError(f"unknown option '{key}'", "<overrides>")
        values[key] = value

    for key in DEFAULTS:
        env_key = f"OSC_ISO_{key.upper()}"
        if env_key in os.environ:
            values[key] = os.environ[env_key]

    for key, value in values.items():
        values[key] = _convert(key, value, conffile)

    values["apiurl"] = values["apiurl"].rstrip("/")

    config.clear()
    config.update(values)

    if config["debug"]:
        print(f"DEBUG: config file: {conffile}", file=sys.stderr)
    return config


def generated_kiwi_name(kiwi):
    """
    Name of the patched descriptor that is written next to ``kiwi``:
    ``foo.kiwi`` -> ``foo.generated.kiwi``
    """
    base, ext = os.path.splitext(kiwi)
    if ext != ".kiwi":
        return kiwi + ".generated.kiwi"
    return f"{base}.generated.kiwi"


def product_dir(cfg=None):
    """
    Directory of the checked out product package.
    """
    cfg = cfg if cfg is not None else config
    return os.path.join(cfg["workdir"], cfg["project"], cfg["package"])


def cache_dir(cfg=None):
    cfg = cfg if cfg is not None else config
    return cfg["cache_dir"] or os.path.join(cfg["workdir"], ".cache")
