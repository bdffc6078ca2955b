"""Mock Anthropic clients — canned replies for AI assistant and retry tests.

Invariants:
    - MockAnthropicClient sequences replies (one per complete call); an Exception
      entry is raised instead of returned
    - Every call's kwargs are recorded in .calls for prompt assertions
    - FakeMessages mimics AsyncAnthropic().messages.create for the resilient client

Design Decisions:
    - Flat mock classes (no inheritance): simple, explicit, easy to debug
    - _Block/_Message mirror the SDK attribute names read by response_text and
      _log_success, nothing more
"""


# -- Mock Anthropic SDK objects ------------------------------------------------


class _Block:
    """Mock content block (text only is read by the planner)."""

    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)


class _Usage:
    def __init__(self, input_tokens=100, output_tokens=50):
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens


class _Message:
    """Mock Message returned by messages.create()."""

    def __init__(self, content, stop_reason="end_turn", input_tokens=100, output_tokens=50):
        self.content = content
        self.stop_reason = stop_reason
        self.usage = _Usage(input_tokens, output_tokens)


def text_message(text, tokens=(100, 50)):
    """SDK-shaped message with a single text block."""
    return _Message([_Block(type="text", text=text)], "end_turn", tokens[0], tokens[1])


class FakeMessages:
    """Stands in for AsyncAnthropic().messages. Raises Exception entries in order."""

    def __init__(self, outcomes):
        self._outcomes = list(outcomes)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


# -- Planner-level mock ----------------------------------------------------------


class MockAnthropicClient:
    """Replaces ResilientAnthropicClient. Sequences pre-configured text replies."""

    def __init__(self, responses):
        self._responses = responses
        self._idx = 0
        self.calls = []

    async def complete(self, **kwargs):
        self.calls.append(kwargs)
        if self._idx >= len(self._responses):
            raise RuntimeError(
                f"MockAnthropicClient: no response at index {self._idx} "
                f"(configured {len(self._responses)})",
            )
        reply = self._responses[self._idx]
        self._idx += 1
        if isinstance(reply, Exception):
            raise reply
        return reply
