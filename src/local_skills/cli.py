"""CLI application entry point."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from local_skills.commands.add import add as add_skills
from local_skills.commands.context import ProjectContext
from local_skills.commands.info import (
    InfoQuery,
    InstalledSkillQuery,
    RemoteSkillQuery,
    info as skill_info,
)
from local_skills.commands.ls import (
    InstalledQuery,
    ListFilter,
    LsQuery,
    MarketplaceQuery,
    PluginQuery,
    ls as list_skills,
)
from local_skills.commands.remove import remove as remove_skill
from local_skills.commands.update import update as update_skill
from local_skills.config.loader import load_config
from local_skills.core.errors import InvalidSpecifierError, LocalSkillsError
from local_skills.core.models import UpdateStatus
from local_skills.core.specifier import parse_marketplace_ref, parse_specifier, source_label
from local_skills.utils.output import (
    configure_logging,
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    name="local-skills",
    help="Extract skills from Claude Code plugin marketplaces into your project",
    no_args_is_help=True,
)


def format_error(error: LocalSkillsError) -> str:
    """Render an error the way every command reports it."""
    return f"Error [{error.code.value}]: {error.message}"


def _fail(message: str) -> NoReturn:
    print_error(message)
    raise typer.Exit(1)


def _project(ctx: typer.Context) -> ProjectContext:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (merged over user and project config)",
    ),
    project_dir: Optional[Path] = typer.Option(
        None,
        "--project-dir",
        "-C",
        help="Project directory (default: current directory)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
):
    """Extract skills from Claude Code plugin marketplaces into your project."""
    configure_logging(verbose)

    project = (project_dir or Path.cwd()).resolve()
    try:
        cfg = load_config(config, project_dir=project)
    except ValidationError as e:
        print_error("Configuration validation failed:")
        console.print(e)
        raise typer.Exit(1)
    except (OSError, yaml.YAMLError) as e:
        _fail(f"Failed to load config: {e}")

    ctx.obj = ProjectContext(project_dir=project, settings=cfg.settings)


@app.command("add")
def add_command(
    ctx: typer.Context,
    specifier: str = typer.Argument(..., help="plugin@marketplace[:ref]:skill (skill may be *)"),
):
    """Add a skill (or every skill of a plugin) from a marketplace."""
    try:
        spec = parse_specifier(specifier)
        installed = add_skills(_project(ctx), spec)
    except LocalSkillsError as e:
        _fail(format_error(e))

    source = escape(source_label(spec.plugin, spec.marketplace))
    if spec.is_wildcard and not installed:
        print_warning(f"No skills found in {source}")
    elif spec.is_wildcard:
        print_success(f"Added all skills ({len(installed)}) from {source}")
        for name in installed:
            console.print(f"  • {name}")
    else:
        print_success(f'Added skill "{escape(spec.skill)}" from {source}')


@app.command("update")
def update_command(
    ctx: typer.Context,
    skill: str = typer.Argument(..., help="Name of the skill to update"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite locally modified skill files",
    ),
):
    """Update an installed skill to the latest commit of its ref."""
    try:
        result = update_skill(_project(ctx), skill, force=force)
    except LocalSkillsError as e:
        _fail(format_error(e))

    if result.status is UpdateStatus.UPDATED:
        print_success(
            f'Updated skill "{escape(skill)}" ({result.old_sha[:7]} → {result.new_sha[:7]})'
        )
    elif result.status is UpdateStatus.ALREADY_UP_TO_DATE:
        print_info(f'Skill "{escape(skill)}" is already up to date')
    else:
        print_info(f'Skill "{escape(skill)}" is pinned to a specific commit, skipping update')


@app.command("remove")
def remove_command(
    ctx: typer.Context,
    skill: str = typer.Argument(..., help="Name of the skill to remove"),
):
    """Remove an installed skill."""
    try:
        remove_skill(_project(ctx), skill)
    except LocalSkillsError as e:
        _fail(format_error(e))

    print_success(f'Removed skill "{escape(skill)}"')


@app.command("ls")
def ls_command(
    ctx: typer.Context,
    source: Optional[str] = typer.Argument(
        None, help="marketplace[:ref] or plugin@marketplace[:ref] (default: installed skills)"
    ),
    long: bool = typer.Option(
        False,
        "--long",
        "-l",
        help="Show descriptions from SKILL.md front matter",
    ),
    installed: bool = typer.Option(False, "--installed", help="Show only installed skills"),
    not_installed: bool = typer.Option(
        False, "--not-installed", help="Show only skills that are not installed"
    ),
):
    """List skills, installed or offered by a marketplace."""
    if installed and not_installed:
        _fail("Error: --installed and --not-installed are mutually exclusive")

    list_filter = None
    if installed:
        list_filter = ListFilter.INSTALLED
    elif not_installed:
        list_filter = ListFilter.NOT_INSTALLED

    try:
        query = _ls_query(source)
        entries = list_skills(_project(ctx), query, long=long, filter=list_filter)
    except LocalSkillsError as e:
        _fail(format_error(e))

    if not entries:
        print_info("No skills found")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Skill", style="green", no_wrap=True)
    table.add_column("Source")
    table.add_column("Installed", justify="center")
    if long:
        table.add_column("Description")

    for entry in entries:
        row = [escape(entry.name), escape(entry.source), "[green]✓[/green]" if entry.installed else ""]
        if long:
            row.append(escape(entry.description or ""))
        table.add_row(*row)

    console.print(table)


def _ls_query(source: Optional[str]) -> LsQuery:
    if source is None:
        return InstalledQuery()

    if "@" in source:
        spec = parse_specifier(source)
        return PluginQuery(plugin=spec.plugin, marketplace=spec.marketplace, ref=spec.ref)

    parsed = parse_marketplace_ref(source)
    return MarketplaceQuery(marketplace=parsed.marketplace, ref=parsed.ref)


@app.command("info")
def info_command(
    ctx: typer.Context,
    skill: str = typer.Argument(
        ..., help="Installed skill name, or plugin@marketplace[:ref]:skill for a remote skill"
    ),
):
    """Show details about a skill."""
    try:
        query = _info_query(skill)
        result = skill_info(_project(ctx), query)
    except LocalSkillsError as e:
        _fail(format_error(e))

    console.print(f"[dim]Skill:[/dim] [bold]{escape(result.name)}[/bold]")
    if result.installed_sha:
        console.print(
            f"[dim]Installed:[/dim] [green]yes[/green] [dim]({result.installed_sha[:7]})[/dim]"
        )

    details = [("Source", result.source), ("Ref", result.ref), ("SHA", result.sha)]
    details += [(key, value) for key, value in result.front_matter.items()]
    for key, value in details:
        if value is not None:
            console.print(f"[dim]{escape(key)}:[/dim] {escape(str(value))}", highlight=False)


def _info_query(skill: str) -> InfoQuery:
    if "@" not in skill:
        return InstalledSkillQuery(name=skill)

    spec = parse_specifier(skill)
    if spec.skill is None or spec.is_wildcard:
        raise InvalidSpecifierError(f'A single skill name is required for info: "{skill}"')

    return RemoteSkillQuery(
        plugin=spec.plugin, marketplace=spec.marketplace, name=spec.skill, ref=spec.ref
    )


if __name__ == "__main__":
    app()
