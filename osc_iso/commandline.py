import argparse
import sys
import textwrap

from . import __version__
from . import conf
from .builder import IsoBuilder
from .overrides import parse_directives


class HelpFormatter(argparse.RawDescriptionHelpFormatter):
    def _split_lines(self, text, width):
        # remove the leading and trailing whitespaces to avoid printing unwanted blank lines
        text = text.strip()

        result = []
        for line in text.splitlines():
            if not line.strip():
                result.append("")
            else:
                result.extend(textwrap.wrap(line, width))
        return result


class Command:
    #: Name of the command as used in the argument parser.
    name: str = None

    def __init__(self):
        if not self.name:
            raise ValueError(f"Command '{self.__class__.__name__}' has no 'name' set")

        self.parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.get_description(),
            formatter_class=HelpFormatter,
        )
        self.init_arguments()

    def get_description(self):
        """
        Return the description of the command, which is the dedented docstring.
        """
        if not self.__doc__:
            return ""
        return textwrap.dedent(self.__doc__).strip()

    def add_argument(self, *args, **kwargs):
        return self.parser.add_argument(*args, **kwargs)

    def init_arguments(self):
        """
        Override to add arguments to the argument parser.
        """

    def post_parse_args(self, args):
        pass

    def run(self, args):
        """
        Override to implement the command functionality.
        The return value is used as the exit status.
        """
        raise NotImplementedError()

    def main(self, argv=None):
        args = self.parser.parse_args(argv)
        self.post_parse_args(args)
        return self.run(args)


class IsoCommand(Command):
    """
    Build a product ISO image locally with osc

    The product is checked out from the build service, its kiwi descriptor
    is patched to use the repositories the product resolves against plus the
    repositories given as arguments, and the image is built in a local build root.

    Arguments have the form PROJECT/REPOSITORY or PROJECT/REPOSITORY:PACKAGE.
    The former adds the repository to the image sources with a higher priority
    number than the product's own repositories. The latter also makes PROJECT
    the only provider of PACKAGE in REPOSITORY. Arguments can be repeated.

    Examples:
        osc-iso
        osc-iso home:user:branches:Devel:CASP:1.0/SLE_12_SP2:velum
        osc-iso home:user/SLE_12_SP2:salt home:user/SLE_12_SP2:salt-minion
    """

    name = "osc-iso"

    def init_arguments(self):
        self.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}",
        )
        self.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            default=None,
            help="increase verbosity",
        )
        self.add_argument(
            "--debug",
            action="store_true",
            default=None,
            help="print info useful for debugging",
        )
        self.add_argument(
            "--traceback",
            action="store_true",
            default=None,
            help="print call trace in case of errors",
        )
        self.add_argument(
            "-A",
            "--apiurl",
            metavar="URL",
            help="Open Build Service API URL passed to osc",
        )
        self.add_argument(
            "-c",
            "--config",
            dest="conffile",
            metavar="FILE",
            help="specify alternate configuration file",
        )
        self.add_argument(
            "--workdir",
            metavar="DIR",
            help="directory the product is checked out to",
        )
        self.add_argument(
            "--no-sudo",
            action="store_true",
            help="don't ask for sudo credentials before building",
        )
        self.add_argument(
            "overrides",
            metavar="PROJECT/REPOSITORY[:PACKAGE]",
            nargs="*",
            help="repository to add to the image sources, optionally with a package it provides",
        )

    def post_parse_args(self, args):
        overrides = {}
        if args.workdir:
            overrides["workdir"] = args.workdir
        if args.no_sudo:
            overrides["use_sudo"] = False

        conf.get_config(
            override_conffile=args.conffile,
            override_apiurl=args.apiurl,
            override_debug=args.debug,
            override_verbose=args.verbose,
            override_traceback=args.traceback,
            overrides=overrides,
        )
        args.directives = parse_directives(args.overrides)

    def run(self, args):
        builder = IsoBuilder(args.directives)
        if builder.build_iso():
            return 0
        return 1


def main():
    from . import babysitter

    sys.exit(babysitter.run(IsoCommand()))
