"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..errors import PlayPathError
from .providers import configure_logging, get_client

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="playpath",
    help="Chat with a PlayPath RAG assistant and manage its knowledge base",
    no_args_is_help=True,
    add_completion=True,
)

items_app = typer.Typer(help="Manage knowledge-base items", no_args_is_help=True)
app.add_typer(items_app, name="items")

# Console for rich output
console = Console()

EXIT_WORDS = ("exit", "quit", "q")
TEXT_PREVIEW_LENGTH = 200


def _print_error(error: PlayPathError) -> None:
    status = f" (HTTP {error.status})" if error.status else ""
    console.print(f"[red]Error: {escape(error.message)}{status}[/red]")
    for detail in error.errors:
        console.print(f"[red]  - {escape(detail)}[/red]")


def _print_usage(response) -> None:
    if response.usage is not None:
        console.print(f"[dim]Usage: {response.usage}/{response.limit} (trial account)[/dim]")


def _parse_tags(tags: str | None) -> list[str] | None:
    if not tags:
        return None
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show request/response debug logs"
    )
):
    """PlayPath command-line client."""
    configure_logging(verbose)


@app.command()
def chat(
    system_prompt: str | None = typer.Option(
        None,
        "--system-prompt",
        "-p",
        help="Custom system prompt for the session"
    )
):
    """Interactive chat session with automatic history."""
    async def _chat():
        client = get_client(console)

        try:
            session = client.create_chat_session(system_prompt)

            console.print("[bold cyan]PlayPath Chat[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue

                if user_input.strip().lower() in EXIT_WORDS:
                    console.print("[dim]Goodbye![/dim]")
                    break

                try:
                    response = await session.send_message(user_input)
                except PlayPathError as e:
                    # Failed turns are not recorded; the session stays usable
                    _print_error(e)
                    continue

                console.print(f"[bold green]Assistant:[/bold green] {response.reply}\n")
                _print_usage(response)

            console.print(f"[dim]{len(session)} messages in history[/dim]")
        finally:
            await client.close()

    asyncio.run(_chat())


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message to send"),
    system_prompt: str | None = typer.Option(
        None,
        "--system-prompt",
        "-p",
        help="Custom system prompt"
    )
):
    """Send a single message without history."""
    async def _ask():
        client = get_client(console)

        try:
            response = await client.rag_chat(message, system_prompt=system_prompt)
            console.print(f"[bold green]Assistant:[/bold green] {response.reply}")
            _print_usage(response)
        except PlayPathError as e:
            _print_error(e)
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_ask())


@app.command()
def ping():
    """Check that the RAG and Items APIs are reachable."""
    async def _ping():
        all_healthy = True
        client = get_client(console)

        try:
            try:
                await client.rag_chat("Hello, this is a test message.")
                console.print("[green]+[/green] RAG API: OK")
            except PlayPathError as e:
                console.print(f"[red]x[/red] RAG API: FAILED ({e.message})")
                all_healthy = False

            try:
                items = await client.get_items()
                console.print("[green]+[/green] Items API: OK")
                console.print(f"[dim]{len(items)} items in knowledge base[/dim]")
            except PlayPathError as e:
                console.print(f"[red]x[/red] Items API: FAILED ({e.message})")
                all_healthy = False
        finally:
            await client.close()

        if not all_healthy:
            raise typer.Exit(code=1)

    asyncio.run(_ping())


@items_app.command("list")
def list_items():
    """List all knowledge-base items."""
    async def _list():
        client = get_client(console)

        try:
            items = await client.get_items()

            if not items:
                console.print("[yellow]No items found[/yellow]")
                return

            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("ID", style="dim")
            table.add_column("Title", style="cyan")
            table.add_column("State", style="yellow")
            table.add_column("Tags")

            for item in items:
                table.add_row(
                    str(item.id),
                    item.title or "No title",
                    item.state or "unknown",
                    ", ".join(item.tags or []),
                )

            console.print(table)
        except PlayPathError as e:
            _print_error(e)
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_list())


@items_app.command("show")
def show_item(item_id: str = typer.Argument(..., help="Item ID")):
    """Show an item and its similar items."""
    async def _show():
        client = get_client(console)

        try:
            item = await client.get_item(item_id)

            table = Table(show_header=False, box=None)
            table.add_column("Field", style="bold cyan", width=8)
            table.add_column("Value")

            text = item.text or "No text"
            if item.text and len(item.text) > TEXT_PREVIEW_LENGTH:
                text = item.text[:TEXT_PREVIEW_LENGTH] + "..."

            table.add_row("ID", str(item.id))
            table.add_row("Title", item.title or "No title")
            table.add_row("URL", item.url or "No URL")
            table.add_row("Tags", ", ".join(item.tags) if item.tags else "No tags")
            table.add_row("State", item.state or "unknown")

            console.print(table)
            console.print(Panel(text, title="Text", border_style="dim"))

            if item.neighbors:
                console.print("\n[bold]Similar items:[/bold]")
                for i, neighbor in enumerate(item.neighbors, 1):
                    console.print(f"  {i}. {neighbor.title or 'No title'} [dim](ID: {neighbor.id})[/dim]")
        except PlayPathError as e:
            _print_error(e)
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_show())


@items_app.command("create")
def create_item(
    title: str | None = typer.Option(None, "--title", "-t", help="Item title"),
    url: str | None = typer.Option(None, "--url", "-u", help="Source URL"),
    text: str | None = typer.Option(None, "--text", "-x", help="Text content"),
    tags: str | None = typer.Option(None, "--tags", help="Comma-separated tags"),
):
    """Create a knowledge-base item (title or text required)."""
    async def _create():
        client = get_client(console)

        try:
            created = await client.create_item({
                "title": title,
                "url": url,
                "text": text,
                "tags": _parse_tags(tags),
            })
            console.print(f"[green]Item created with ID: {created.id}[/green]")
        except PlayPathError as e:
            _print_error(e)
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_create())


@items_app.command("update")
def update_item(
    item_id: str = typer.Argument(..., help="Item ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    url: str | None = typer.Option(None, "--url", "-u", help="New URL"),
    text: str | None = typer.Option(None, "--text", "-x", help="New text content"),
    tags: str | None = typer.Option(None, "--tags", help="New comma-separated tags"),
):
    """Update fields of an existing item."""
    updates = {
        key: value
        for key, value in (("title", title), ("url", url), ("text", text), ("tags", _parse_tags(tags)))
        if value
    }
    if not updates:
        console.print("[yellow]No updates provided.[/yellow]")
        raise typer.Exit(code=1)

    async def _update():
        client = get_client(console)

        try:
            updated = await client.update_item(item_id, updates)
            console.print(f"[green]Item {updated.id} updated successfully.[/green]")
        except PlayPathError as e:
            _print_error(e)
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_update())


@items_app.command("delete")
def delete_item(
    item_id: str = typer.Argument(..., help="Item ID"),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    )
):
    """Delete a knowledge-base item."""
    if not yes:
        confirm = typer.confirm(f"Are you sure you want to delete item {item_id}?")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    async def _delete():
        client = get_client(console)

        try:
            result = await client.delete_item(item_id)
            console.print(f"[green]{result.message}[/green]")
        except PlayPathError as e:
            _print_error(e)
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_delete())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
