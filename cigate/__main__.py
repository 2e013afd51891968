from cigate.cli.main import app

app(prog_name="cigate")
