from .base import BaseExtractor, DEFAULT_NODE_TEXT_TEMPLATE

__all__ = ['BaseExtractor', 'DEFAULT_NODE_TEXT_TEMPLATE']
