from .base import OpenAIAgent
from .worker import OpenAIAgentWorker

__all__ = ['OpenAIAgent', 'OpenAIAgentWorker']
