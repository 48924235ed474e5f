from rate_converter.main import app

app()
