from linkcase_cli.cli import app

app(prog_name="linkcase")
