"""
Messaging Module: reconstruction of the emitter's message from beacon fragments.
"""

from .message_reconstructor import MessageReconstructor

__all__ = ['MessageReconstructor']
