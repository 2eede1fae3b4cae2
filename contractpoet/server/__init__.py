"""contractpoet render service"""
from .client import RenderClient

__all__ = ['RenderClient']
