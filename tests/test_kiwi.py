import unittest

from lxml import etree

from osc_iso.kiwi import kiwi_repositories
from osc_iso.kiwi import patch_kiwi
from osc_iso.kiwi import repository_paths
from osc_iso.oscerr import KiwiError
from osc_iso.overrides import parse_directives

from .common import BUILDINFO
from .common import KIWI
from .common import OscIsoTestCase


class TestRepositoryPaths(OscIsoTestCase):
    def test_buildinfo_only(self):
        self.assertEqual(repository_paths(BUILDINFO, []), [("A", "R1"), ("B", "R1")])

    def test_overrides_are_appended(self):
        directives = parse_directives(["C/R3:foo", "C/R3:bar", "D/R4"])
        self.assertEqual(
            repository_paths(BUILDINFO, directives),
            [("A", "R1"), ("B", "R1"), ("C", "R3"), ("D", "R4")],
        )

    def test_duplicates_across_lists_are_kept(self):
        directives = parse_directives(["A/R1:foo"])
        self.assertEqual(
            repository_paths(BUILDINFO, directives),
            [("A", "R1"), ("B", "R1"), ("A", "R1")],
        )


class TestPatchKiwi(OscIsoTestCase):
    def test_replace_instrepos(self):
        result = patch_kiwi(KIWI, BUILDINFO, parse_directives(["A/R1:foo", "C/R3"]))
        self.assertEqual(
            kiwi_repositories(result),
            [
                ("obsrepository_1", 1, "obs://A/R1"),
                ("obsrepository_2", 2, "obs://B/R1"),
                ("obsrepository_3", 3, "obs://A/R1"),
                ("obsrepository_4", 4, "obs://C/R3"),
            ],
        )
        self.assertNotIn("obsrepositories:/", result)
        self.assertNotIn("SUSE_SLE-12-SP2_Update", result)

    def test_instrepo_attributes(self):
        result = patch_kiwi(KIWI, BUILDINFO, [])
        root = etree.fromstring(result.encode("utf-8"))
        instrepos = root.findall("instsource/instrepo")
        self.assertEqual(len(instrepos), 2)
        self.assertEqual(dict(instrepos[0].attrib), {"name": "obsrepository_1", "priority": "1", "local": "true"})
        self.assertEqual([i.get("path") for i in instrepos[0]], ["obs://A/R1"])

    def test_priorities_are_contiguous(self):
        directives = parse_directives(["X/R%s:pkg" % i for i in range(1, 12)])
        result = patch_kiwi(KIWI, BUILDINFO, directives)
        priorities = [priority for _, priority, _ in kiwi_repositories(result)]
        self.assertEqual(priorities, list(range(1, 14)))

    def test_rest_of_document_is_kept(self):
        result = patch_kiwi(KIWI, BUILDINFO, [])
        self.assertTrue(result.startswith("<?xml"))
        self.assertTrue(result.endswith("</image>\n"))
        self.assertIn("<!-- product repositories -->", result)
        self.assertIn('<productvar name="DISTNAME">CAASP</productvar>', result)
        self.assertIn('<repopackage name="kernel-default"/>', result)
        self.assertIn("<author>SUSE</author>", result)

    def test_only_new_elements_are_indented(self):
        kiwi = KIWI.replace(
            "    <productoptions>\n      <productvar",
            "    <productoptions>\n        <productvar",
        )
        result = patch_kiwi(kiwi, BUILDINFO, [])
        expected = """<?xml version="1.0" encoding="UTF-8"?>
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
    <repopackages>
      <repopackage name="kernel-default"/>
    </repopackages>
    <instrepo name="obsrepository_1" priority="1" local="true">
      <source path="obs://A/R1"/>
    </instrepo>
    <instrepo name="obsrepository_2" priority="2" local="true">
      <source path="obs://B/R1"/>
    </instrepo>
  </instsource>
</image>
"""
        self.assertEqual(result, expected)

    def test_indent_empty_instsource(self):
        kiwi = "<image>\n  <instsource/>\n</image>\n"
        result = patch_kiwi(kiwi, '<buildinfo><path project="A" repository="R1"/></buildinfo>', [])
        expected = """<image>
  <instsource>
    <instrepo name="obsrepository_1" priority="1" local="true">
      <source path="obs://A/R1"/>
    </instrepo>
  </instsource>
</image>
"""
        self.assertEqual(result, expected)

    def test_empty_buildinfo_no_directives(self):
        result = patch_kiwi(KIWI, "<buildinfo/>", [])
        self.assertEqual(kiwi_repositories(result), [])
        root = etree.fromstring(result.encode("utf-8"))
        self.assertIsNotNone(root.find("instsource"))

    def test_empty_buildinfo_with_directives(self):
        result = patch_kiwi(KIWI, "<buildinfo/>", parse_directives(["A/R1:foo", "A/R1:bar"]))
        self.assertEqual(kiwi_repositories(result), [("obsrepository_1", 1, "obs://A/R1")])

    def test_nested_instrepos_are_removed(self):
        kiwi = """<image>
  <instsource>
    <instrepo name="a" priority="1"><source path="obs://a/a"/></instrepo>
  </instsource>
  <other>
    <instrepo name="b" priority="2"><source path="obs://b/b"/></instrepo>
  </other>
</image>"""
        result = patch_kiwi(kiwi, BUILDINFO, [])
        self.assertEqual(
            kiwi_repositories(result),
            [("obsrepository_1", 1, "obs://A/R1"), ("obsrepository_2", 2, "obs://B/R1")],
        )
        self.assertFalse(result.startswith("<?xml"))

    def test_custom_scheme(self):
        result = patch_kiwi(KIWI, BUILDINFO, [], scheme="obs-local://")
        self.assertEqual(kiwi_repositories(result)[0][2], "obs-local://A/R1")

    def test_missing_instsource(self):
        kiwi = "<image><description/></image>"
        self.assertRaises(KiwiError, patch_kiwi, kiwi, BUILDINFO, [])
        # nothing to add, nothing to complain about
        self.assertEqual(kiwi_repositories(patch_kiwi(kiwi, "<buildinfo/>", [])), [])

    def test_malformed(self):
        self.assertRaises(etree.XMLSyntaxError, patch_kiwi, "<image>", BUILDINFO, [])
        self.assertRaises(etree.XMLSyntaxError, patch_kiwi, KIWI, "<buildinfo>", [])


if __name__ == "__main__":
    unittest.main()
