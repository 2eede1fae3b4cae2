from .json_formatter import RenderJSONFormatter

__all__ = ["RenderJSONFormatter"]
