#!/usr/bin/env python3
"""Manage the locally saved pantry and share it as a link.

Usage:
    python pantry.py list
    python pantry.py add eggs milk "olive oil"
    python pantry.py remove milk
    python pantry.py toggle flour
    python pantry.py share [--origin https://example.org]
    python pantry.py import "<token or link>"
    python pantry.py clear
"""

import sys

from rich.console import Console

from src.kitchen.pantry_store import PantryStore

console = Console()

USAGE = "Usage: python pantry.py {list|add ITEM...|remove ITEM...|toggle ITEM|share [--origin URL]|import TOKEN_OR_URL|clear}"


def run_command(store: PantryStore, command: str, args: list[str]) -> int:
    """Apply one command to the store and print the outcome. Returns exit code."""
    if command == "list":
        selected = store.selected()
        if not selected:
            console.print("[yellow]Pantry is empty[/yellow]")
        for item in selected:
            console.print(f"• {item}")
        return 0

    if command in ("add", "remove"):
        if not args:
            console.print(f"[red]✗ {command} needs at least one item[/red]")
            return 1
        for item in args:
            store.set(item, command == "add")
        console.print(f"[green]✓ {len(store.selected())} items selected[/green]")
        return 0

    if command == "toggle":
        if len(args) != 1:
            console.print("[red]✗ toggle needs exactly one item[/red]")
            return 1
        state = store.toggle(args[0])
        console.print(f"{args[0]}: {'selected' if state else 'not selected'}")
        return 0

    if command == "share":
        origin = None
        if args[:1] == ["--origin"]:
            if len(args) < 2:
                console.print("[red]✗ --origin requires a URL[/red]")
                return 1
            origin = args[1]
        console.print(store.share_url(origin))
        return 0

    if command == "import":
        if len(args) != 1:
            console.print("[red]✗ import needs one token or link[/red]")
            return 1
        imported = store.import_share(args[0])
        if not imported:
            console.print("[yellow]Nothing to import (unreadable or empty link)[/yellow]")
            return 0
        console.print(f"[green]✓ Imported {len(imported)} items:[/green] {', '.join(imported)}")
        return 0

    if command == "clear":
        store.clear()
        console.print("[green]✓ Pantry cleared[/green]")
        return 0

    console.print(f"[red]✗ Unknown command: {command}[/red]")
    print(USAGE)
    return 1


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)
    sys.exit(run_command(PantryStore(), sys.argv[1], sys.argv[2:]))
