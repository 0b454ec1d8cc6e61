from slsrun.cli.main import app

app()
