from classroom.session.handoff import SessionHandoff, SessionLoadError, handoff_key

__all__ = ["SessionHandoff", "SessionLoadError", "handoff_key"]
