"""Service layer for tracing sessions.

The module exports:
    TracingSession: One canvas, its ink, the active word and the scoring
        round lifecycle (auto check, clear, navigation, custom words).
    Debouncer: Cooperative one-shot timer behind the auto check.

Example usage:
    Score after the child stops drawing::

        from tracer_lib.api import TracingSession

        session = TracingSession()
        session.resize(800, 600)
        session.layout_current_word(params, anchor)
        ...
        outcome = session.tick()
        if outcome is not None:
            print(f"{outcome.score}%")
"""

from .services import Debouncer, TracingSession

__all__ = ['TracingSession', 'Debouncer']
