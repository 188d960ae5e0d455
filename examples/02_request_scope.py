"""
Example 02: Per-Request Control

This example demonstrates the translate_response decorator, per-request
overrides through TranslationContext, and remote lookups.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Annotated, Optional

from response_translate import (
    CallableRemoteClient,
    Page,
    TranslateField,
    TranslationContext,
    TranslationEngine,
    build_default_registry,
    translate_response,
)

client = CallableRemoteClient()


@client.route("user-service", "names")
def user_names(codes, param):
    # A real client would call the service here with its own timeout
    users = {1001: "Alice", 1002: "Bob"}
    return {code: users[code] for code in codes if code in users}


engine = TranslationEngine(build_default_registry(remote_client=client))


@dataclass
class OrderView:
    order_no: str
    owner_id: Annotated[
        Optional[int],
        TranslateField(
            "remote", target="owner_name", remote_service="user-service", remote_method="names"
        ),
    ]
    owner_name: Optional[str] = None


@translate_response(engine)
def list_orders():
    return Page(items=[OrderView("A-1", 1001), OrderView("A-2", 1003)], total=2, size=20)


@translate_response(engine)
def export_orders():
    # Exports keep raw codes
    TranslationContext.current().set_request_enabled(False)
    return [OrderView("A-1", 1001)]


@translate_response(engine)
async def get_order():
    await asyncio.sleep(0)
    return OrderView("A-2", 1002)


def main():
    print("=== Per-Request Control ===\n")

    page = list_orders()
    print(f"list_orders ({page.total} rows, {page.pages} page):")
    for order in page.items:
        print(f"  - {order.order_no}: {order.owner_name}")
    print()

    exported = export_orders()
    print(f"export_orders: owner_name={exported[0].owner_name}\n")

    order = asyncio.run(get_order())
    print(f"get_order (async): {order.order_no} -> {order.owner_name}\n")


if __name__ == "__main__":
    main()
