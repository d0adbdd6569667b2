"""eventrouter CLI — Typer-based command-line interface.

Provides the ``eventrouter`` command with subcommands for inspecting a
router's route table and for demonstrating the two dispatch orders.

All output uses Rich for formatted terminal display.
"""
