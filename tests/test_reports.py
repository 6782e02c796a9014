# ##### BEGIN GPL LICENSE BLOCK #####
#
#  This program is free software; you can redistribute it and/or
#  modify it under the terms of the GNU General Public License
#  as published by the Free Software Foundation; either version 2
#  of the License, or (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program; if not, write to the Free Software Foundation,
#  Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
#
# ##### END GPL LICENSE BLOCK #####

import os
import tempfile
import unittest

from dragupload import reports
from dragupload.__main__ import get_parser, read_items
from dragupload.datas import DroppedItem
from dragupload.tasks import BatchResult, Task
from .boilerplate import RecordingNotifier


class TestAddReport(unittest.TestCase):
    def setUp(self):
        reports.reports.clear()

    def test_same_reports_merged_but_always_shown(self):
        notifier = RecordingNotifier()
        first = reports.add_report("Upload failed", timeout=5, type="ERROR", notifier=notifier)
        second = reports.add_report("Upload failed", timeout=5, type="ERROR", notifier=notifier)
        self.assertIs(first, second)
        self.assertEqual(len(reports.reports), 1)
        self.assertEqual(notifier.notifications, [("ERROR", "Upload failed")] * 2)

    def test_merged_report_reaches_other_notifier(self):
        first, second = RecordingNotifier(), RecordingNotifier()
        reports.add_report("Drop aborted", type="ERROR", notifier=first)
        reports.add_report("Drop aborted", type="ERROR", notifier=second)
        self.assertEqual(second.notifications, [("ERROR", "Drop aborted")])

    def test_expired_reports_removed(self):
        reports.add_report("old", timeout=-1)
        reports.add_report("new")
        self.assertEqual([r.text for r in reports.reports], ["new"])


class TestBatchSummary(unittest.TestCase):
    def make_batch(self):
        created = Task(DroppedItem("orc.png"), 0)
        created.result.update({"document_id": "a1", "name": "Orc", "kind": "actor"})
        created.finished("done")
        failed = Task(DroppedItem("map.png"), 1)
        failed.error("upload failed")
        skipped = Task(DroppedItem("skip.png"), 2)
        skipped.skipped("dismissed")
        return BatchResult([created, failed, skipped])

    def test_summary(self):
        text = reports.build_batch_summary(self.make_batch())
        self.assertIn("imported 1 of 3", text)
        self.assertIn("orc.png: @Actor[a1]{Orc}", text)
        self.assertIn("Failed: map.png", text)

    def test_pairs(self):
        self.assertEqual(
            self.make_batch().pairs(), [("orc.png", "a1"), ("map.png", None), ("skip.png", None)]
        )

    def test_single_whisper(self):
        notifier = RecordingNotifier()
        reports.send_batch_summary(self.make_batch(), notifier)
        self.assertEqual(len(notifier.whispers), 1)


class TestCommandLine(unittest.TestCase):
    def test_read_items(self):
        with tempfile.TemporaryDirectory() as tempdir:
            file_path = os.path.join(tempdir, "orc_boss.png")
            with open(file_path, "wb") as f:
                f.write(b"png")
            items = read_items([file_path], "https://example.com/ignored.png")
        self.assertEqual(items, (DroppedItem("orc_boss.png", raw_bytes=b"png", mime_hint="image/png"),))

    def test_url_only(self):
        items = read_items([], "https://example.com/art/dragon.webp")
        self.assertEqual(items[0].original_filename, "dragon.webp")
        self.assertTrue(items[0].is_external)

    def test_parser(self):
        args = get_parser().parse_args(["a.png", "--x", "10", "--free", "--no-prompt", "--kind", "journal"])
        self.assertEqual((args.files, args.x, args.free, args.no_prompt, args.kind), (["a.png"], 10.0, True, True, "journal"))
