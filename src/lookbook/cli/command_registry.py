#!/usr/bin/env python3
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


from __future__ import annotations

import typer

from .commands import catalog as catalog_command
from .commands import config as config_command
from .commands import init_config as init_config_command
from .commands import items_csv as items_csv_command
from .commands import ranking as ranking_command
from .commands import screen as screen_command
from .commands import tags as tags_command


def register(app: typer.Typer) -> None:
    catalog_command.register(app)
    tags_command.register(app)
    screen_command.register(app)
    ranking_command.register(app)
    items_csv_command.register(app)
    config_command.register(app)
    init_config_command.register(app)
