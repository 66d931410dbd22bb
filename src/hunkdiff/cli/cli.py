"""CLI entrypoint: Typer app definition and command registration"""

import typer

from hunkdiff.cli.commands import diff_cmd, init_cmd, summary_cmd


app = typer.Typer(name="hunkdiff", no_args_is_help=True, help="Line diffs grouped into expandable context hunks")

app.command(name="diff")(diff_cmd)
app.command(name="summary")(summary_cmd)
app.command(name="init")(init_cmd)
