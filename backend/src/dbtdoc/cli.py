"""dbtdoc command line.

Usage:
    dbtdoc                          Document every undocumented model
    dbtdoc --gen-specific a,b       Regenerate docs for the named models
    dbtdoc --dry-run                Print everything instead of writing
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from dbtdoc.config import ConfigError, load_config
from dbtdoc.graph.selection import GenerationMode, Specific, Undocumented
from dbtdoc.llm.client import GenerationError
from dbtdoc.llm.credentials import (
    Credential,
    CredentialError,
    UserEmail,
    create_generator,
    credential_from_env,
)
from dbtdoc.manifest.loader import LoadError
from dbtdoc.pipeline import execute_run, prepare_run
from dbtdoc.writeback import ConsoleSink, FileSink, OutputSink, WriteError

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="dbtdoc",
    help="Generate dbt model and column documentation with an LLM.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        level=logging.DEBUG if verbose else logging.INFO,
        force=True,
    )
    # LiteLLM is chatty at INFO
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _parse_mode(gen_undocumented: bool, gen_specific: str | None) -> GenerationMode:
    if gen_specific is not None and gen_undocumented:
        raise typer.BadParameter(
            "--gen-undocumented and --gen-specific cannot be used together"
        )
    if gen_specific is not None:
        mode = Specific.of(gen_specific.split(","))
        if not mode.names:
            raise typer.BadParameter("--gen-specific needs at least one model name")
        return mode
    return Undocumented()


def _ask_for_credential() -> Credential:
    """Fall back to the free-tier proxy after asking for an email address."""
    credential = credential_from_env()
    if credential is not None:
        return credential

    console.print("You haven't specified an API Key. No worries, this one's on TextQL!")
    console.print(
        "In return, please type your email address. "
        "We don't collect any other data, nor sell your email to third parties."
    )
    console.print(
        "If you're okay with this, press enter. "
        "Otherwise, type 'no' and set the OPENAI_API_KEY environment variable."
    )
    email = typer.prompt("Email (type no to abort)").strip()
    if not email or email.lower() == "no":
        raise CredentialError("No API key or email provided")
    return UserEmail(email)


@app.command()
def run(
    working_directory: Annotated[
        Path, typer.Option("--working-directory", "-w", help="DBT project root (default: .)")
    ] = Path("."),
    gen_undocumented: Annotated[
        bool,
        typer.Option(
            "--gen-undocumented",
            help="Generate docs for all undocumented models (default, disabled by --gen-specific)",
        ),
    ] = False,
    gen_specific: Annotated[
        str | None,
        typer.Option(
            "--gen-specific",
            help="Generate docs only for these model names (comma-separated list)",
        ),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Don't write any docs, print them instead.")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging.")] = False,
) -> None:
    """Generate docs for dbt models and point schema files at them."""
    _configure_logging(verbose)
    mode = _parse_mode(gen_undocumented, gen_specific)

    try:
        config = load_config(working_directory)
        plan = prepare_run(config, mode)
        if not plan.jobs:
            console.print("No models need documentation.")
            return
        credential = _ask_for_credential()
    except (ConfigError, LoadError, CredentialError) as e:
        err_console.print(f"[red]Initialization failed. Aborting:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    generator = create_generator(credential, config, log_queries=not dry_run)
    sink: OutputSink = ConsoleSink() if dry_run else FileSink()
    if dry_run:
        console.print("Dry Run. Results will not be written.")

    try:
        summary = asyncio.run(execute_run(plan, generator, sink))
    except GenerationError as e:
        err_console.print(
            f"[red]Generation failed, no schema files were changed:[/red] {escape(str(e))}"
        )
        raise typer.Exit(1)
    except (LoadError, WriteError) as e:
        err_console.print(f"[red]Writing docs failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if summary.models_generated:
        console.print(
            f"[green]Success![/green] Documented {summary.models_generated} models "
            f"in {len(summary.documents)} schema files. "
            "Make sure to run `dbt docs generate`."
        )


def main() -> None:
    app()
