"""
Execution of external commands.

Everything the build needs is done by ``osc``, ``sudo`` and friends running as
subprocesses. ``Executor`` is the only place that spawns them, tests substitute
an object with the same ``run()`` method.
"""

import shlex
import subprocess
from typing import List
from typing import NamedTuple
from typing import Optional

from . import oscerr
from .output import indent_lines
from .output import log_result
from .output import log_step
from .output import print_msg


class CommandResult(NamedTuple):
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self):
        return self.returncode == 0


class Executor:
    def run(
        self,
        cmd: List[str],
        description: Optional[str] = None,
        stdin: Optional[str] = None,
        print_error: bool = False,
        cwd: Optional[str] = None,
    ) -> CommandResult:
        """
        Run ``cmd`` and wait for it to finish; stdout and stderr are captured.

        :param description: Announce the command with this text and report success or failure.
        :param stdin: Text fed to the standard input of the command.
        :param print_error: On failure, also print the command and its captured output.
        :param cwd: Directory to run the command in.
        """
        if description is not None:
            log_step(description)

        print_msg(f"Running: {shlex.join(cmd)}" + (f" (in {cwd})" if cwd else ""), print_to="debug")

        try:
            proc = subprocess.run(
                cmd,
                input=stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=cwd,
                universal_newlines=True,
                check=False,
            )
        except FileNotFoundError as e:
            if description is not None:
                print()
            raise oscerr.ExtRuntimeError(e.strerror, e.filename or cmd[0])

        result = CommandResult(proc.returncode, proc.stdout or "", proc.stderr or "")

        if description is not None:
            log_result(result.returncode)
            if not result.ok and print_error:
                print_command_failure(cmd, result)

        return result


def print_command_failure(cmd, result):
    print(f"   > command: {shlex.join(cmd)}")
    print("   > stdout:")
    print(indent_lines(result.stdout))
    print("   > stderr:")
    print(indent_lines(result.stderr))
