# examples/prompt_client_demo.py
"""
需要真实的 OpenAI 兼容服务：
    export TYPEDPROMPT_DEFAULT_BASE_URL=https://api.openai.com/v1
    export TYPEDPROMPT_DEFAULT_API_KEY=sk-...
    export TYPEDPROMPT_DEFAULT_MODEL=gpt-4o-mini
"""
import asyncio
from typing import List

from pydantic import BaseModel

from typedprompt import PromptClient
from typedprompt.core.logging import setup_logging


class City(BaseModel):
    name: str
    country: str


async def main():
    setup_logging(level="DEBUG")
    client = PromptClient()

    haiku = client.prompt(lambda topic: f"Write a haiku about {topic}.")
    print(await haiku.run("autumn"))

    cities = client.prompt(
        lambda n: f"List {n} large cities as a JSON array of objects with name and country.",
        schema=List[City],
        temperature=0,
    )
    async for city in cities.stream(5):
        print(f"{city.name} ({city.country})")


if __name__ == "__main__":
    asyncio.run(main())
