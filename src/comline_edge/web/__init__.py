from .app import create_app, error_response
from .responses import ExactJSONResponse, dump_json

__all__ = ["create_app", "error_response", "ExactJSONResponse", "dump_json"]
