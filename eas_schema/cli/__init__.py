from .main import app, main  # noqa: F401
