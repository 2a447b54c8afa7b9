"""Tests for ExampleClientAdapter (template/reference adapter)."""

from docpipe.inference.example_client_adapter import ExampleClientAdapter


class TestExampleClientAdapter:
    async def test_returns_default_response(self) -> None:
        adapter = ExampleClientAdapter()
        result = await adapter.create_chat_completion(
            temperature=0.0,
            system_prompt="sys",
            user_content="user",
        )
        assert result == ExampleClientAdapter.DEFAULT_RESPONSE

    async def test_returns_configured_response(self) -> None:
        adapter = ExampleClientAdapter(response="fixed")
        result = await adapter.create_chat_completion(
            temperature=0.0,
            system_prompt="",
            user_content=[{"type": "text", "text": "x"}],
        )
        assert result == "fixed"

    async def test_ignores_input_parameters(self) -> None:
        adapter = ExampleClientAdapter()
        r1 = await adapter.create_chat_completion(temperature=0.0, system_prompt="s1", user_content="u1")
        r2 = await adapter.create_chat_completion(temperature=1.0, system_prompt="s2", user_content="u2")
        assert r1 == r2
