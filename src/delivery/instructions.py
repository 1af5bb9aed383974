"""Handling advisories for the driver, derived from cart contents."""

from delivery.cart import BEVERAGE_CATEGORY, FRAGILE_TAG, FROZEN_CATEGORY, CartItem, is_perishable

HEAVY_ITEM_LBS = 5.0


def get_delivery_instructions(items: list[CartItem]) -> list[str]:
    instructions: list[str] = []

    perishables = [item for item in items if is_perishable(item)]
    if perishables:
        instructions.append("Keep refrigerated items cold during transport")
        instructions.append("Deliver frozen items first")
        if any(item.category == FROZEN_CATEGORY for item in perishables):
            instructions.append("Use insulated bags for frozen products")

    if any(FRAGILE_TAG in item.tags or item.category == BEVERAGE_CATEGORY for item in items):
        instructions.append("Handle fragile items with care")
        instructions.append("Keep glass containers upright")

    if any((item.weight or 0) > HEAVY_ITEM_LBS for item in items):
        instructions.append("Heavy items - use proper lifting technique")

    return instructions
