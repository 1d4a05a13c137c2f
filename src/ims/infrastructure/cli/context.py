"""Shared state passed from the root command to every subcommand."""

from __future__ import annotations

from dataclasses import dataclass

import click

from ims.application.access import AccessPolicy, Capability, Role
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import Container


@dataclass
class CliContext:
    container: Container
    role: Role

    def require(self, capability: Capability) -> None:
        try:
            AccessPolicy.require(self.role, capability)
        except DomainException as exc:
            raise click.ClickException(str(exc))


pass_cli_context = click.make_pass_decorator(CliContext)
