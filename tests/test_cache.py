import os
import shutil
import tempfile
import unittest

from osc_iso.cache import cached_file
from osc_iso.cache import cached_file_path

from .common import OscIsoTestCase


class TestCachedFile(OscIsoTestCase):
    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp(prefix="osc_iso_test_")
        self.cache_dir = os.path.join(self.tmpdir, ".cache")
        self.fetched = 0

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def fetch(self):
        self.fetched += 1
        return "<buildinfo/>"

    def test_miss_then_hit(self):
        name = "_product:CAASP-dvd5-DVD-x86_64.buildinfo"

        self.assertEqual(cached_file(self.cache_dir, name, self.fetch), "<buildinfo/>")
        self.assertEqual(self.fetched, 1)
        path = cached_file_path(self.cache_dir, name)
        self.assertTrue(os.path.isfile(path))
        with open(path) as f:
            self.assertEqual(f.read(), "<buildinfo/>")

        self.assertEqual(cached_file(self.cache_dir, name, self.fetch), "<buildinfo/>")
        self.assertEqual(self.fetched, 1)

    def test_existing_file_is_never_refreshed(self):
        os.makedirs(self.cache_dir)
        with open(cached_file_path(self.cache_dir, "entry"), "w") as f:
            f.write("stale")
        self.assertEqual(cached_file(self.cache_dir, "entry", self.fetch), "stale")
        self.assertEqual(self.fetched, 0)

    def test_failed_fetch_is_not_stored(self):
        def fetch():
            raise RuntimeError("fetch failed")

        self.assertRaises(RuntimeError, cached_file, self.cache_dir, "entry", fetch)
        self.assertFalse(os.path.exists(cached_file_path(self.cache_dir, "entry")))

        # the next run fetches again
        self.assertEqual(cached_file(self.cache_dir, "entry", self.fetch), "<buildinfo/>")
        self.assertEqual(self.fetched, 1)


if __name__ == "__main__":
    unittest.main()
