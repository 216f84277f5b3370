"""
Basic Coupler usage.

Pushes a few items from plain function calls, then drains them with
``async for`` and prints the notifications.

Run with: poetry run python examples/example_basic.py
"""

import asyncio

from coupler import create_coupler


async def main():
    coupler = create_coupler()
    coupler.on("pull", lambda remaining: print(f"  pulled, {remaining} left"))
    coupler.on("disposed", lambda: print("  disposed"))

    for word in ["hello", "async", "world"]:
        print(f"push {word!r} -> buffered {coupler.next(word)}")
    coupler.done()

    async for word in coupler:
        print(f"got {word!r}")


if __name__ == "__main__":
    asyncio.run(main())
