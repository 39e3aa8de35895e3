from lopper.cli import app

app(prog_name="lopper")
