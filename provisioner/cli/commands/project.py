import asyncio
import json

from rich.console import Console
from rich.table import Table
import typer

from provisioner.cli.client import get_api_client

PROJECT_API = "/api/v2/project"

console = Console()


async def get_project_command(key: str) -> dict:
    api_client = get_api_client()
    try:
        response = await api_client.get(f"{PROJECT_API}/{key}")
        response.raise_for_status()
        return response.json()
    finally:
        await api_client.aclose()


async def validate_key_command(key: str) -> dict | None:
    """Returns the error body when the key is taken, None when it is free."""
    api_client = get_api_client()
    try:
        response = await api_client.get(f"{PROJECT_API}/key/validate", params={"projectKey": key})
        if response.status_code == 409:  # noqa: PLR2004
            return response.json()
        response.raise_for_status()
        return None
    finally:
        await api_client.aclose()


async def generate_key_command(name: str) -> str:
    api_client = get_api_client()
    try:
        response = await api_client.get(f"{PROJECT_API}/key/generate", params={"name": name})
        response.raise_for_status()
        return response.json()["projectKey"]
    finally:
        await api_client.aclose()


app = typer.Typer()


@app.command()
def get(
    key: str = typer.Argument(..., help="Project key"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show a provisioned project"""
    try:
        project = asyncio.run(get_project_command(key))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(code=1) from None

    if json_output:
        typer.echo(json.dumps(project, indent=2))
        return

    console.print(
        f"[bold]{project['projectKey']}[/bold] [magenta]{project['projectName']}[/magenta]"
    )
    for label, field in (
        ("Bugtracker", "bugtrackerUrl"),
        ("Collaboration space", "collaborationSpaceUrl"),
        ("SCM", "scmvcsUrl"),
    ):
        if project.get(field):
            console.print(f"{label}: [cyan]{project[field]}[/cyan]")

    quickstarters = project.get("quickstarters") or []
    if quickstarters:
        table = Table("component", "type", "description")
        for quickstarter in quickstarters:
            table.add_row(
                quickstarter.get("component_id", ""),
                quickstarter.get("component_type", ""),
                quickstarter.get("component_description", ""),
            )
        console.print(table)


@app.command("validate-key")
def validate_key(key: str = typer.Argument(..., help="Project key to check")):
    """Check whether a project key is still free"""
    try:
        result = asyncio.run(validate_key_command(key))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(code=1) from None

    if result:
        console.print(f"[bold red]✗[/bold red] {result['error_message']}")
        raise typer.Exit(code=1)
    console.print(f"[bold green]✓ Key {key} is available[/bold green]")


@app.command("generate-key")
def generate_key(name: str = typer.Option(..., "--name", "-n")):
    """Generate a project key from a project name"""
    try:
        key = asyncio.run(generate_key_command(name))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(code=1) from None
    typer.echo(key)
