"""CLI entrypoint: Typer app definition and command registration"""

import typer

from vibecoder.cli.commands import (
    ask_cmd, export_cmd, history_cmd, init_cmd, main_callback, parse_cmd, plugins_cmd, providers_cmd,
)


app = typer.Typer(name="vibecoder", no_args_is_help=True, help="AI coding console: prompt, parse, and keep history")

app.callback()(main_callback)
app.command(name="parse")(parse_cmd)
app.command(name="ask")(ask_cmd)
app.command(name="history")(history_cmd)
app.command(name="export")(export_cmd)
app.command(name="init")(init_cmd)
app.command(name="plugins")(plugins_cmd)
app.command(name="providers")(providers_cmd)
