"""
Astris Interaction Module

Turns stabilized gestures into scene mutations.
"""
from .controller import CooldownState, InteractionAction, InteractionController
from .pipeline import FrameResult, GesturePipeline

__all__ = [
    'CooldownState',
    'InteractionAction',
    'InteractionController',
    'FrameResult',
    'GesturePipeline',
]
