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

import json
import os
import tempfile
import unittest

from dragupload import global_vars, persistent_preferences
from dragupload.datas import Prefs


class TestPreferencesFile(unittest.TestCase):
    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tempdir.name, "preferences.json")

    def tearDown(self):
        self.tempdir.cleanup()

    def write(self, content: str):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(content)

    def test_missing_file_gives_defaults(self):
        self.assertEqual(persistent_preferences.load_preferences_from_JSON(self.path), Prefs())

    def test_roundtrip(self):
        prefs = Prefs(upload_source="s3", stagger=40, actor_folder_name="Imports")
        persistent_preferences.write_preferences_to_JSON(prefs, self.path)
        loaded = persistent_preferences.load_preferences_from_JSON(self.path)
        self.assertEqual(loaded, prefs)
        self.assertEqual(global_vars.PREFS["upload_source"], "s3")

    def test_unknown_keys_ignored(self):
        self.write(json.dumps({"stagger": 10, "theme": "dark"}))
        prefs = persistent_preferences.load_preferences_from_JSON(self.path)
        self.assertEqual(prefs.stagger, 10)
        self.assertEqual(prefs.upload_source, "data")

    def test_invalid_values_fall_back(self):
        self.write(json.dumps({"upload_source": "ftp", "default_kind": "scene"}))
        with self.assertLogs("dragupload.persistent_preferences", level="WARNING"):
            prefs = persistent_preferences.load_preferences_from_JSON(self.path)
        self.assertEqual(prefs.upload_source, "data")
        self.assertEqual(prefs.default_kind, "actor")

    def test_wrong_types_coerced_or_replaced(self):
        self.write(json.dumps({"stagger": "40", "title_case_names": "yes", "actor_folder_name": 7}))
        with self.assertLogs("dragupload.persistent_preferences", level="WARNING") as logs:
            prefs = persistent_preferences.load_preferences_from_JSON(self.path)
        self.assertEqual(prefs.stagger, 40)
        self.assertIs(prefs.title_case_names, False)
        self.assertEqual(prefs.actor_folder_name, Prefs().actor_folder_name)
        self.assertEqual(len(logs.records), 2)

    def test_unusable_number_replaced(self):
        self.write(json.dumps({"stagger": "twenty", "ssl_context": "NONE"}))
        with self.assertLogs("dragupload.persistent_preferences", level="WARNING"):
            prefs = persistent_preferences.load_preferences_from_JSON(self.path)
        self.assertEqual(prefs.stagger, 20)
        self.assertEqual(prefs.ssl_context, "CERTIFI")

    def test_corrupt_file_removed(self):
        self.write("{not json")
        prefs = persistent_preferences.load_preferences_from_JSON(self.path)
        self.assertEqual(prefs, Prefs())
        self.assertFalse(os.path.exists(self.path))

    def test_folder_name_by_kind(self):
        prefs = Prefs(actor_folder_name="A", note_folder_name="N")
        self.assertEqual(prefs.folder_name("actor"), "A")
        self.assertEqual(prefs.folder_name("journal"), "N")
