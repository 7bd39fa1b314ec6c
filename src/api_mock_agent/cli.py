"""CLI entry point for api-mock-agent."""

import json
import logging
from pathlib import Path

import click

from api_mock_agent.config import settings
from api_mock_agent.errors import MockAgentError
from api_mock_agent.generator.spec import SpecGenerator
from api_mock_agent.mock.random_provider import SystemRandomProvider
from api_mock_agent.parser.base import MockEndpoint
from api_mock_agent.parser.loader import load_spec_file
from api_mock_agent.parser.openapi import derive_endpoints
from api_mock_agent.parser.validator import ensure_valid_spec, spec_info
from api_mock_agent.projects import ProjectService
from api_mock_agent.store.json_file import JsonFileProjectStore


class AgentGroup(click.Group):
    """Reports MockAgentError as a normal click error (message + exit code 1)."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except MockAgentError as e:
            raise click.ClickException(str(e)) from e


def _load_spec(spec_path: Path) -> dict:
    """Load a JSON spec file and apply the structural gate."""
    return ensure_valid_spec(load_spec_file(spec_path))


def _endpoints_json(endpoints: list[MockEndpoint]) -> str:
    return json.dumps([ep.to_wire() for ep in endpoints], indent=2, ensure_ascii=False)


def _emit(content: str, output: Path | None) -> None:
    if output is None:
        click.echo(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")


seed_option = click.option("--seed", type=int, default=settings.SEED, help="Seed for reproducible mock data.")
store_option = click.option(
    "--store",
    "store_dir",
    default=settings.STORE_DIR,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding project files.",
)
owner_option = click.option("--owner", required=True, help="Id of the signed-in user.")


@click.group(cls=AgentGroup)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Mock Agent — derive mock API endpoints from OpenAPI specifications."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(spec_path: Path):
    """Check that a JSON file is an acceptable OpenAPI document."""
    spec = _load_spec(spec_path)
    info = spec_info(spec)
    click.echo(f"OK: {info.title or spec_path.name} ({len(spec['paths'])} paths)")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Write endpoints JSON here instead of stdout.")
@seed_option
def derive(spec_path: Path, output: Path | None, seed: int | None):
    """Derive mock endpoints from an OpenAPI JSON document."""
    spec = _load_spec(spec_path)
    endpoints = derive_endpoints(spec, rng=SystemRandomProvider(seed), max_depth=settings.MAX_SCHEMA_DEPTH)
    _emit(_endpoints_json(endpoints), output)
    if output is not None:
        click.echo(f"Derived {len(endpoints)} endpoints into {output}")


@main.command()
@click.argument("prompt")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Write the generated spec here instead of stdout.")
@click.option("--llm", "use_llm", is_flag=True, help="Ask an LLM for the spec instead of using templates.")
@click.option("--model", default=None, help="LLM model to use.")
@click.option("--endpoints", "endpoints_path", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Also derive endpoints into this file.")
@seed_option
def generate(prompt: str, output: Path | None, use_llm: bool, model: str | None, endpoints_path: Path | None, seed: int | None):
    """Generate an OpenAPI document from a free-text description."""
    rng = SystemRandomProvider(seed)
    spec = ensure_valid_spec(SpecGenerator(use_llm=use_llm, model=model, rng=rng).generate(prompt))
    _emit(json.dumps(spec, indent=2, ensure_ascii=False), output)
    if output is not None:
        click.echo(f"Spec saved to {output}")

    if endpoints_path is not None:
        endpoints = derive_endpoints(spec, rng=rng, max_depth=settings.MAX_SCHEMA_DEPTH)
        _emit(_endpoints_json(endpoints), endpoints_path)
        click.echo(f"Derived {len(endpoints)} endpoints into {endpoints_path}")


@main.group()
def project():
    """Manage stored mock projects."""


def _service(store_dir: Path, seed: int | None = None) -> ProjectService:
    return ProjectService(
        JsonFileProjectStore(store_dir),
        rng=SystemRandomProvider(seed),
        max_depth=settings.MAX_SCHEMA_DEPTH,
    )


@project.command("create")
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", default=None, help="Project name (defaults to the spec title).")
@owner_option
@store_option
@seed_option
def project_create(spec_path: Path, name: str | None, owner: str, store_dir: Path, seed: int | None):
    """Create a project from a spec file."""
    spec = load_spec_file(spec_path)
    project_id = _service(store_dir, seed).create_project(spec, owner, name=name, default_name=spec_path.stem)
    click.echo(project_id)


@project.command("update")
@click.argument("project_id")
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@owner_option
@store_option
@seed_option
def project_update(project_id: str, spec_path: Path, owner: str, store_dir: Path, seed: int | None):
    """Replace a project's spec and regenerate all of its endpoints."""
    spec = load_spec_file(spec_path)
    updated = _service(store_dir, seed).update_project_spec(project_id, spec, owner)
    click.echo(f"Updated {updated.id}: {len(updated.endpoints)} endpoints")


@project.command("delete")
@click.argument("project_id")
@owner_option
@store_option
def project_delete(project_id: str, owner: str, store_dir: Path):
    """Delete a project and its endpoints."""
    _service(store_dir).delete_project(project_id, owner)
    click.echo(f"Deleted {project_id}")


@project.command("list")
@owner_option
@store_option
def project_list(owner: str, store_dir: Path):
    """List projects, most recently updated first."""
    projects = _service(store_dir).list_projects(owner)
    if not projects:
        click.echo("No projects.")
        return
    for p in projects:
        click.echo(f"{p.id}  {p.name}  ({len(p.endpoints)} endpoints, updated {p.updated_at:%Y-%m-%d %H:%M})")
