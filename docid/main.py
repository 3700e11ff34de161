from docid.api.main import app

__all__ = ["app"]
