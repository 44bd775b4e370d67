from .chat_memory_buffer import ChatMemoryBuffer

__all__ = ['ChatMemoryBuffer']
