"""Async: awaitable values, async factories and concurrent dependencies."""

from __future__ import annotations

import asyncio

from wirebox import Container


class Client:
    def __init__(self, token, base_url) -> None:
        self.token = token
        self.base_url = base_url


async def fetch_token(secret):
    await asyncio.sleep(0)
    return f"token-for-{secret}"


async def amain() -> None:
    container = Container()
    base_url = asyncio.get_running_loop().create_future()
    base_url.set_result("https://api.example.com")

    container.register("secret", "s3cr3t")
    container.register("base_url", base_url)
    container.register("token", fetch_token).as_factory().cached()
    container.register("client", Client).as_instance()

    client = await container.resolve_async("client")
    print(f"token={client.token}")  # => token=token-for-s3cr3t
    print(f"base_url={client.base_url}")  # => base_url=https://api.example.com
    print(f"cached_sync={container.resolve('token')}")  # => cached_sync=token-for-s3cr3t


def main() -> None:
    asyncio.run(amain())


if __name__ == "__main__":
    main()
