# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer
import typer.core


class AliasedTyperGroup(typer.core.TyperGroup):
    """Custom TyperGroup that supports comma-separated command aliases"""

    _CMD_SPLIT_P = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        """Override to resolve aliases to the full command name"""
        cmd_name = self._group_cmd_name(cmd_name)
        return super().get_command(ctx, cmd_name)

    def _group_cmd_name(self, default_name: str) -> str:
        """Find the full command name if default_name is an alias"""
        for cmd in self.commands.values():
            name = cmd.name
            if name and default_name in self._CMD_SPLIT_P.split(name):
                return name
        return default_name


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Aliased group listing the top-level commands in reading order"""

    COMMAND_ORDER = [
        "timeline, tl",
        "recommendations, r",
        "recommendation, rec",
        "departments, d",
        "deadlines, dl",
        "updates, u",
        "export, x",
        "config, c",
    ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        result = [name for name in self.COMMAND_ORDER if name in self.commands]
        for cmd_name in self.commands.keys():
            if cmd_name not in result:
                result.append(cmd_name)
        return result
