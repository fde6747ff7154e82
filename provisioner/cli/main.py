import typer
import uvicorn

from provisioner.cli.commands import project

app = typer.Typer()


@app.callback()
def callback():
    """
    Project Provisioner CLI
    """


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host"),  # noqa: S104
    port: int = typer.Option(8000, "--port"),
):
    """Run the provisioning API"""
    uvicorn.run("provisioner.api:create_app", factory=True, host=host, port=port)


app.add_typer(project.app, name="project")
