import unittest
from unittest import mock

import osc_iso.conf
from osc_iso.runner import CommandResult


KIWI = """<?xml version="1.0" encoding="UTF-8"?>
<image name="CAASP-dvd5-DVD-x86_64" schemaversion="4.1">
  <description type="system">
    <author>SUSE</author>
  </description>
  <!-- product repositories -->
  <instsource>
    <architectures>
      <requiredarch ref="x86_64"/>
    </architectures>
    <productoptions>
      <productvar name="DISTNAME">CAASP</productvar>
    </productoptions>
    <instrepo name="obsrepositories" priority="1" local="true">
      <source path="obsrepositories:/"/>
    </instrepo>
    <instrepo name="SUSE_SLE-12-SP2_Update" priority="2" local="true">
      <source path="obs://SUSE:SLE-12-SP2:Update/standard"/>
    </instrepo>
    <repopackages>
      <repopackage name="kernel-default"/>
    </repopackages>
  </instsource>
</image>
"""


BUILDINFO = """<buildinfo project="Devel:CASP:1.0:ControllerNode" package="_product:CAASP-dvd5-DVD-x86_64">
  <arch>x86_64</arch>
  <bdep name="foo" project="A" repository="R1"/>
  <bdep name="foo" project="B" repository="R1"/>
  <bdep name="bar" project="B" repository="R1"/>
  <bdep name="foo" project="B" repository="R2"/>
  <path project="A" repository="R1"/>
  <path project="B" repository="R1"/>
  <path project="A" repository="R1"/>
</buildinfo>
"""


class FakeExecutor:
    """
    Stand-in for ``osc_iso.runner.Executor`` that records calls instead of running them.

    ``responder(cmd, stdin)`` returns the ``CommandResult`` of a call,
    calls succeed with empty output by default.
    """

    def __init__(self, responder=None):
        self.calls = []
        self.responder = responder

    def run(self, cmd, description=None, stdin=None, print_error=False, cwd=None):
        self.calls.append({"cmd": list(cmd), "stdin": stdin, "cwd": cwd, "description": description})
        if self.responder:
            result = self.responder(cmd, stdin)
            if result is not None:
                return result
        return CommandResult(0, "", "")

    def commands(self):
        return [" ".join(i["cmd"]) for i in self.calls]

    def chroot_inputs(self):
        return [i["stdin"] for i in self.calls if i["cmd"][:2] == ["osc", "chroot"]]


class OscIsoTestCase(unittest.TestCase):
    def setUp(self):
        osc_iso.conf.config.clear()
        osc_iso.conf.config.update(osc_iso.conf.DEFAULTS)
        patcher = mock.patch("osc_iso.output.tty.IS_INTERACTIVE", False)
        patcher.start()
        self.addCleanup(patcher.stop)
