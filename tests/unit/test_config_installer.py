# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.


import tempfile
import unittest
from pathlib import Path

from lookbook.config import installer
from tests.test_support import temp_env


class TestConfigInstaller(unittest.TestCase):
    def test_resolution_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with temp_env({"XDG_CONFIG_HOME": tmpdir, installer.CONFIG_ENV: ""}):
                self.assertEqual(installer.resolve_config_path(), installer.DEFAULT_CONFIG_PATH)
                self.assertEqual(installer.resolve_config_path("~/x.toml"), Path("~/x.toml").expanduser())

                user_path = installer.init_user_config()
                self.assertEqual(user_path, Path(tmpdir) / "lookbook" / "config.toml")
                self.assertEqual(installer.resolve_config_path(), user_path)

            with temp_env({"XDG_CONFIG_HOME": tmpdir, installer.CONFIG_ENV: "/etc/lookbook.toml"}):
                self.assertEqual(installer.resolve_config_path(), Path("/etc/lookbook.toml"))

    def test_init_keeps_existing_unless_forced(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with temp_env({"XDG_CONFIG_HOME": tmpdir}):
                self.assertTrue(installer.user_config_needs_init())
                path = installer.init_user_config()
                self.assertFalse(installer.user_config_needs_init())
                path.write_text("# edited\n", encoding="utf-8")

                installer.init_user_config()
                self.assertEqual(path.read_text(encoding="utf-8"), "# edited\n")

                installer.init_user_config(force=True)
                self.assertEqual(
                    path.read_text(encoding="utf-8"),
                    installer.DEFAULT_CONFIG_PATH.read_text(encoding="utf-8"),
                )


if __name__ == "__main__":
    unittest.main()
