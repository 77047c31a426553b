# Copyright (C) 2008 Novell Inc.  All rights reserved.
# This program is free software; it may be used, copied, modified
# and distributed under the terms of the GNU General Public Licence,
# either version 2, or (at your option) any later version.


class OscIsoBaseError(Exception):
    def __init__(self, args=()):
        super().__init__()
        self.args = args

    def __str__(self):
        return ''.join(self.args)


class SignalInterrupt(Exception):
    """Exception raised on SIGTERM and SIGHUP."""


class ConfigError(OscIsoBaseError):
    """Exception raised when there is an error in the config file"""

    def __init__(self, msg, fname):
        super().__init__()
        self.msg = msg
        self.file = fname

    def __str__(self):
        return f"Error in config file {self.file}\n   {self.msg}"


class NoConfigfile(OscIsoBaseError):
    """Exception raised when the config file cannot be found"""

    def __init__(self, fname, msg):
        super().__init__()
        self.file = fname
        self.msg = msg

    def __str__(self):
        return f"Config file cannot be found: {self.file}\n   {self.msg}"


class WrongArgs(OscIsoBaseError):
    """Exception raised by the cli for wrong arguments usage"""


class ExtRuntimeError(OscIsoBaseError):
    """Exception raised when there is a runtime error of an external tool"""

    def __init__(self, msg, fname):
        super().__init__()
        self.msg = msg
        self.file = fname


class BuildinfoError(OscIsoBaseError):
    """Exception raised when the buildinfo cannot be retrieved or is broken"""

    def __init__(self, msg):
        super().__init__()
        self.msg = msg

    def __str__(self):
        return f"{self.__class__.__name__}: {self.msg}"


class KiwiError(OscIsoBaseError):
    """Exception raised when a kiwi descriptor cannot be patched"""

    def __init__(self, fname, msg):
        super().__init__()
        self.file = fname
        self.msg = msg

    def __str__(self):
        return f"{self.file}: {self.msg}"


class KeyGenerationError(OscIsoBaseError):
    """Exception raised when the signing key cannot be created in the build root"""

    def __init__(self, msg, stderr=None):
        super().__init__()
        self.msg = msg
        self.stderr = stderr
