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

import sys
import unittest


print("----- Tests preparation -----")
runner = unittest.TextTestRunner(buffer=False)
suite = unittest.TestSuite()
testLoader = unittest.TestLoader()

suite.addTests(testLoader.discover("tests", "test_*.py", top_level_dir="."))
print(f"- {suite.countTestCases()} tests discovered and loaded\n")

print("----- Running tests --------------------------------------------------")
result = runner.run(suite)
errors = len(result.errors)
failures = len(result.failures)
if errors + failures != 0:
    sys.exit(1)
