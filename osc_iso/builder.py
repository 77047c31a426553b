# Copyright (C) 2017 SUSE LLC
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
Local build of a product image.

The steps run strictly one after another:
checkout -> patch kiwi -> signing key -> preload build -> patch buildinfo -> build.
Only a failed buildinfo retrieval and a failed key generation abort the run,
other failures are reported and the final check for the image decides the outcome.
"""

import os
import re
import shlex
from urllib.parse import urlsplit

from . import conf
from . import oscerr
from .buildinfo import check_buildinfo
from .buildinfo import filter_buildinfo
from .cache import cached_file
from .kiwi import kiwi_repositories
from .kiwi import patch_kiwi
from .output import log
from .output import print_msg
from .overrides import format_overrides
from .overrides import group_directives
from .runner import Executor


KEY_ID_RE = re.compile(r"key ([^\s]+)")


def gpg_batch_parameters(config):
    """
    Unattended key generation parameters for ``gpg --gen-key --batch``.
    """
    lines = [
        f"Key-Type: {config['gpg_key_type']}",
        f"Key-Length: {config['gpg_key_length']}",
        f"Subkey-Type: {config['gpg_subkey_type']}",
        f"Subkey-Length: {config['gpg_subkey_length']}",
        f"Name-Real: {config['gpg_name_real']}",
        f"Name-Email: {config['gpg_name_email']}",
        f"Expire-Date: {config['gpg_expire_date']}",
        "%commit",
    ]
    return "\n".join(lines)


class IsoBuilder:
    def __init__(self, directives, config=None, executor=None):
        self.directives = list(directives)
        self.config = config if config is not None else conf.config
        self.executor = executor or Executor()

    @property
    def repo_args(self):
        return group_directives(self.directives)

    # paths

    @property
    def product_dir(self):
        return conf.product_dir(self.config)

    @property
    def kiwi_path(self):
        return os.path.join(self.product_dir, self.config["kiwi"])

    @property
    def generated_kiwi(self):
        return conf.generated_kiwi_name(self.config["kiwi"])

    @property
    def generated_kiwi_path(self):
        return os.path.join(self.product_dir, self.generated_kiwi)

    @property
    def buildinfo_path(self):
        name = f"_buildinfo-{self.config['repository']}-{self.config['arch']}.xml"
        return os.path.join(self.product_dir, ".osc", name)

    @property
    def buildinfo_cache_dir(self):
        return os.path.join(conf.cache_dir(self.config), urlsplit(self.config["apiurl"]).netloc or self.config["apiurl"])

    @property
    def buildinfo_cache_name(self):
        return f"{self.config['package']}-{self.config['repository']}-{self.config['arch']}.buildinfo"

    @property
    def chroot_dir(self):
        return self.config["chroot_dir"]

    @property
    def iso_path(self):
        return self.config["iso_path"]

    # steps

    def request_sudo(self):
        if not self.config["use_sudo"]:
            return
        log("Requesting sudo")
        self.executor.run(["sudo", "-v"])

    def show_repo_args(self):
        for line in format_overrides(self.repo_args):
            log(line)

    def checkout(self):
        workdir = self.config["workdir"]
        if os.path.isdir(os.path.join(workdir, self.config["project"])):
            print_msg(f"Product '{self.config['project']}' is already checked out in '{workdir}'", print_to="verbose")
            return
        os.makedirs(workdir, exist_ok=True)
        self.executor.run(
            ["osc", "-A", self.config["apiurl"], "co", f"{self.config['project']}/{self.config['package']}"],
            description="Checking out product",
            print_error=True,
            cwd=workdir,
        )

    def fetch_buildinfo(self):
        result = self.executor.run(
            ["osc", "-A", self.config["apiurl"], "buildinfo", self.config["repository"], self.config["arch"], self.config["kiwi"]],
            description="Retrieving buildinfo",
            print_error=True,
            cwd=self.product_dir,
        )
        if not result.ok:
            raise oscerr.BuildinfoError("buildinfo could not be retrieved")
        check_buildinfo(result.stdout)
        return result.stdout

    def buildinfo(self):
        """
        Return the buildinfo of the product; it's fetched only once and cached afterwards.
        Each build service host, repository and architecture has its own cache entry.
        """
        return cached_file(self.buildinfo_cache_dir, self.buildinfo_cache_name, self.fetch_buildinfo)

    def patch_kiwi(self):
        with open(self.kiwi_path, "rb") as f:
            kiwi_text = f.read()
        buildinfo_text = self.buildinfo()

        log("Patching kiwi definition")
        result = patch_kiwi(kiwi_text, buildinfo_text, self.directives, fname=self.kiwi_path)
        for name, priority, path in kiwi_repositories(result):
            print_msg(f"  {priority:>3} {name}: {path}", print_to="verbose")

        with open(self.generated_kiwi_path, "wb") as f:
            f.write(result)

    def exec_chroot(self, command, description=None):
        """
        Run the shell ``command`` inside the build root.
        The build root is created by building the images if it doesn't exist yet.
        """
        if not os.path.isdir(self.chroot_dir):
            self.build_images()
        return self.executor.run(
            ["osc", "chroot", f"--root={self.chroot_dir}"],
            description=None if description is None else f"(chroot) {description}",
            stdin=command,
        )

    def generate_private_key(self):
        result = self.exec_chroot(
            "grep ^default-key .gnupg/gpg.conf",
            description="Checking if a default-key exists in GPG configuration",
        )
        if result.ok:
            return

        parameters = gpg_batch_parameters(self.config)
        result = self.exec_chroot(
            f"echo {shlex.quote(parameters)} | gpg --gen-key --batch",
            description="Generating GPG keypair",
        )
        if not result.ok:
            raise oscerr.KeyGenerationError("error when creating GPG keypair", result.stderr)

        match = KEY_ID_RE.search(result.stderr)
        if not match:
            raise oscerr.KeyGenerationError("cannot find the id of the generated GPG key", result.stderr)
        key = match.group(1)
        self.exec_chroot(
            f"echo {shlex.quote('default-key ' + key)} >> .gnupg/gpg.conf",
            description=f"Setting generated key {key} as the default signing key",
        )

    def patch_buildinfo(self):
        with open(self.buildinfo_path, "rb") as f:
            buildinfo_text = f.read()
        log("Patching buildinfo")
        result = filter_buildinfo(buildinfo_text, self.directives)
        with open(self.buildinfo_path, "wb") as f:
            f.write(result)

    def build_images(self):
        self.executor.run(
            ["osc", "build", "-l", "--trust-all-projects", self.config["repository"], self.config["arch"], self.generated_kiwi],
            description="Preloading build",
            print_error=True,
            cwd=self.product_dir,
        )
        self.patch_buildinfo()
        self.executor.run(
            ["osc", "build", "-o", "--trust-all-projects", self.config["repository"], self.config["arch"], self.generated_kiwi],
            description="Building images",
            print_error=True,
            cwd=self.product_dir,
        )

    def build_iso(self):
        """
        Run all steps and report where the image is.
        Return ``True`` if the image exists afterwards.
        """
        self.request_sudo()
        self.show_repo_args()
        self.checkout()
        self.patch_kiwi()
        self.generate_private_key()
        self.build_images()

        if os.path.exists(self.iso_path):
            log(f"Please, find your ISO located at {self.iso_path}")
            return True
        log(f"ISO image couldn't be found at {self.iso_path}. Something went wrong, sorry...")
        return False
