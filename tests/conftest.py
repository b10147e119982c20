import pytest

from classroom.llm import LLMConnector


# Deterministic stand-in for loop.call_later: time only moves when a test says so
class ManualHandle:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    def __init__(self):
        self.now = 0.0
        self.handles = []

    def __call__(self, delay, callback):
        handle = ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled and h.callback is not None]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self.pending if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.now = handle.when
            callback, handle.callback = handle.callback, None
            callback()
        self.now = target


class MockConnector(LLMConnector):
    """Returns canned responses in order and records every prompt it was sent."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get_text_response(self, system_prompt, chat_history, temperature=0.7, max_tokens=2000, json_mode=True):
        self.calls.append(chat_history[-1].content)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def mock_connector():
    """Factory: mock_connector('{"prompts": [...]}', ...)."""
    return MockConnector
