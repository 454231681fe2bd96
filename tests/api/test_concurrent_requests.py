import asyncio
import random

import pytest

from relay.api.dependencies import get_generation_client
from tests._helpers.fakes import FakeGenerationClient


pytestmark = pytest.mark.asyncio


class JitteryClient(FakeGenerationClient):
    """Finishes requests out of order."""

    async def generate_content(self, prompt: str):
        await asyncio.sleep(random.uniform(0, 0.02))
        return await super().generate_content(prompt)


async def test_concurrent_prompts_do_not_mix(test_app, async_client):
    fake = JitteryClient()
    test_app.dependency_overrides[get_generation_client] = lambda: fake

    prompts = [f"service-{i}" for i in range(25)]
    responses = await asyncio.gather(
        *(async_client.post("/", json={"prompt": p}) for p in prompts)
    )

    for prompt, resp in zip(prompts, responses):
        assert resp.status_code == 200
        assert resp.json() == {"blueprint": f"root\n\t{prompt}"}
    assert sorted(fake.prompts) == sorted(prompts)


async def test_failures_isolated_between_requests(test_app, async_client):
    def render(prompt: str) -> str:
        return "" if prompt == "blank" else f"root\n\t{prompt}"

    test_app.dependency_overrides[get_generation_client] = (
        lambda: FakeGenerationClient(render=render)
    )

    ok, blank, too_long = await asyncio.gather(
        async_client.post("/", json={"prompt": "api"}),
        async_client.post("/", json={"prompt": "blank"}),
        async_client.post("/", json={"prompt": "x" * 10001}),
    )

    assert ok.status_code == 200
    assert ok.json() == {"blueprint": "root\n\tapi"}
    assert blank.status_code == 502
    assert too_long.status_code == 400
