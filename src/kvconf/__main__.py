from kvconf.cli.app import app

app()
